# Field validators for garage, user and customer forms.

from garage.validators.result import ValidationResult                    # noqa
from garage.validators.dispatch import (                                 # noqa
    GarageField,
    UserField,
    validate_garage_field,
    validate_garage_updates,
    validate_user_field,
    validate_user_updates,
)
