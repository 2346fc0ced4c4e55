"""Identities: the participants of the social graph.

An identity starts invalid and becomes valid, permanently, the first time
its id is set. Profile fields can only be written on a valid identity.
"""
from typing import Optional

from .core.constants import INVALID_IDENTITY_TEXT
from .core.errors import stoprule_required, stoprule_uninitialized


class Identity:
    """A uniquely identified participant with optional profile fields.

    Example:
        ada = Identity("ada").set_first_name("Ada").set_last_name("Lovelace")
        ada.set_id("someone-else")  # False, id is immutable once set
    """

    def __init__(self, identity_id: Optional[str] = None):
        self._id: Optional[str] = None
        self._valid = False
        self._first_name: Optional[str] = None
        self._middle_name: Optional[str] = None
        self._last_name: Optional[str] = None
        self._email: Optional[str] = None
        self._phone_number: Optional[str] = None

        if identity_id is not None:
            self.set_id(identity_id)

    @property
    def id(self) -> Optional[str]:
        return self._id

    @property
    def valid(self) -> bool:
        return self._valid

    @property
    def first_name(self) -> Optional[str]:
        return self._first_name

    @property
    def middle_name(self) -> Optional[str]:
        return self._middle_name

    @property
    def last_name(self) -> Optional[str]:
        return self._last_name

    @property
    def email(self) -> Optional[str]:
        return self._email

    @property
    def phone_number(self) -> Optional[str]:
        return self._phone_number

    @property
    def display_name(self) -> str:
        """Name parts that are set, space separated. Empty if none."""
        parts = (self._first_name, self._middle_name, self._last_name)
        return " ".join(p for p in parts if p)

    def set_id(self, identity_id: str) -> bool:
        """Set the id once.

        Returns:
            True if the id was set, False if the identity already had one

        Raises:
            RequiredValueError: If identity_id is None or empty
        """
        if not identity_id:
            stoprule_required("identity_id")
        if self._valid:
            return False
        self._id = identity_id
        self._valid = True
        return True

    def set_first_name(self, first_name: str) -> "Identity":
        self._check_profile_write("first_name", first_name)
        self._first_name = first_name
        return self

    def set_middle_name(self, middle_name: str) -> "Identity":
        self._check_profile_write("middle_name", middle_name)
        self._middle_name = middle_name
        return self

    def set_last_name(self, last_name: str) -> "Identity":
        self._check_profile_write("last_name", last_name)
        self._last_name = last_name
        return self

    def set_email(self, email: str) -> "Identity":
        self._check_profile_write("email", email)
        self._email = email
        return self

    def set_phone_number(self, phone_number: str) -> "Identity":
        self._check_profile_write("phone_number", phone_number)
        self._phone_number = phone_number
        return self

    def _check_profile_write(self, field_name: str, value: Optional[str]) -> None:
        if not self._valid:
            stoprule_uninitialized("identity", f"set {field_name}")
        if value is None:
            stoprule_required(field_name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Identity):
            return NotImplemented
        if not (self._valid and other._valid):
            return self is other
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __str__(self) -> str:
        if not self._valid or self._id is None:
            return INVALID_IDENTITY_TEXT
        name = self.display_name
        if name:
            return f"Identity ID: {self._id} ({name})"
        return f"Identity ID: {self._id}"

    def __repr__(self) -> str:
        return f"Identity({self._id!r})"


def sort_by_id(identities) -> list[Identity]:
    """Order identities by id, lowest first."""
    return sorted(identities, key=lambda identity: identity.id)
