"""Example: drive the registration use case without Flask.

Controllers stay thin; the cascade, validation and submission rules all live
in the registration module and can be used directly.
"""

import importlib

from config import get_settings_module

from src.talent_hub.talent_hub.container import build_container
from src.talent_hub.talent_hub.core.exceptions import ValidationError
from src.talent_hub.talent_hub.registration.form import FormSnapshot
from src.talent_hub.talent_hub.registration.reducer import DepartmentSelected, FieldChanged, reduce


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    store = container.reference_store
    store.load()
    print("ready:", store.is_ready, "failures:", store.failures)

    form = FormSnapshot()
    if store.departments:
        form = reduce(form, DepartmentSelected(store.departments[0].department_id), store)
    form = reduce(form, FieldChanged("phone", "11912345678"), store)
    print("phone:", form.phone)

    try:
        container.registration_service.submit(form)
    except ValidationError as e:
        for field_name, message in e.errors.items():
            print(f"{field_name}: {message}")


if __name__ == "__main__":
    main()
