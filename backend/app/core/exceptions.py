class CourierTrackError(Exception):
    """Base exception for expected business conditions."""


class NoUpdatableFieldsError(CourierTrackError):
    """Raised when a partial update carries no recognised fields."""


class DuplicateConsigneeNumberError(CourierTrackError):
    """Raised when every generated consignee number collided with an existing one."""


class EmailAlreadyExistsError(CourierTrackError):
    """Raised when an email is already registered to another user."""


class InactiveAccountError(CourierTrackError):
    """Raised when a deactivated user tries to log in."""
