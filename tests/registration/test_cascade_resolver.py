from __future__ import annotations

from src.talent_hub.talent_hub.core.enums import InternLevel, ProfileType
from src.talent_hub.talent_hub.registration.form import FormSnapshot
from src.talent_hub.talent_hub.registration.resolver import (
    TRACK_RESETS,
    apply_resets,
    position_label,
    resolve,
    supervisor_candidates,
)


def test_department_without_tracks_has_no_candidates(reference):
    res = resolve(reference.tracks, reference.positions, FormSnapshot(department_id="dep-empty"))
    assert res.filtered_tracks == ()
    assert res.filtered_positions == ()


def test_no_department_yields_empty_sets_and_full_reset(reference):
    snapshot = FormSnapshot(track_id="trk-eng", position_id="lnk-dev-jr")
    res = resolve(reference.tracks, reference.positions, snapshot)
    assert res.filtered_tracks == ()
    assert res.resets == TRACK_RESETS


def test_tracks_are_filtered_by_department(reference):
    for dept in ("dep-tech", "dep-people", "dep-empty"):
        res = resolve(reference.tracks, reference.positions, FormSnapshot(department_id=dept))
        expected = {t.track_id for t in reference.tracks if t.department_id == dept}
        assert {t.track_id for t in res.filtered_tracks} == expected
        assert all(t.department_id == dept for t in res.filtered_tracks)


def test_positions_are_filtered_by_track_and_keep_order(reference):
    snapshot = FormSnapshot(department_id="dep-tech", track_id="trk-eng", position_id="lnk-dev-pl")
    res = resolve(reference.tracks, reference.positions, snapshot)
    assert [p.link_id for p in res.filtered_positions] == ["lnk-dev-jr", "lnk-dev-pl"]
    assert res.resets == frozenset()


def test_department_change_resets_incompatible_track_position_and_level(reference):
    before = FormSnapshot(
        department_id="dep-tech",
        track_id="trk-eng",
        position_id="lnk-dev-jr",
        position="Desenvolvedor Júnior",
        intern_level=InternLevel.D,
    )
    after = before.with_changes(department_id="dep-people")

    res = resolve(reference.tracks, reference.positions, after)
    assert res.resets == TRACK_RESETS

    reset = apply_resets(after, res)
    assert reset.track_id == ""
    assert reset.position_id == ""
    assert reset.position == ""
    assert reset.intern_level is InternLevel.A


def test_track_change_resets_only_position_and_level(reference):
    snapshot = FormSnapshot(
        department_id="dep-tech", track_id="trk-data", position_id="lnk-dev-jr", intern_level=InternLevel.C
    )
    res = resolve(reference.tracks, reference.positions, snapshot)
    assert res.resets == frozenset({"position_id", "intern_level"})

    reset = apply_resets(snapshot, res)
    assert reset.track_id == "trk-data"
    assert reset.position_id == ""
    assert reset.intern_level is InternLevel.A


def test_resolver_handles_missing_reference_data():
    res = resolve((), (), FormSnapshot(department_id="dep-tech", track_id="trk-eng"))
    assert res.filtered_tracks == ()
    assert res.filtered_positions == ()
    assert "track_id" in res.resets


def test_position_label_prefers_catalog_name_and_falls_back_to_raw_id(reference):
    assert position_label(reference.positions, "lnk-dev-jr") == "Desenvolvedor Júnior"
    assert position_label(reference.positions, "lnk-analyst") == "pos-analyst"
    assert position_label(reference.positions, "missing") is None
    assert position_label(reference.positions, "") is None


def test_supervisor_candidates_follow_profile_hierarchy(reference):
    regular = supervisor_candidates(reference.users, ProfileType.REGULAR)
    leader = supervisor_candidates(reference.users, ProfileType.LEADER)

    assert {u.user_id for u in regular} == {"usr-director", "usr-leader"}
    assert {u.user_id for u in leader} == {"usr-director"}
    assert supervisor_candidates(reference.users, ProfileType.DIRECTOR) == []
    assert supervisor_candidates(reference.users, None) == []
