"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from .enums import ContractType, InternLevel

MIN_WORKING_AGE = 16
MAX_AGE = 100
MIN_PASSWORD_LENGTH = 6
MAX_PROFILE_IMAGE_BYTES = 5 * 1024 * 1024
PHONE_DIGITS = 11

DEFAULT_INTERN_LEVEL = InternLevel.A
DEFAULT_CONTRACT_TYPE = ContractType.CLT
DEFAULT_REFERENCE_LOAD_WORKERS = 4

MIN_SCORE = 1
MAX_SCORE = 5
