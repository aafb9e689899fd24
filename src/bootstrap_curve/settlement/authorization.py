"""Authorization — единственный писатель конфигураций движка.

Владелец управляет целями, комиссией, lock/unlock, unpause и назначением
pauser. pause принимается только от назначенного pauser.
"""

from typing import Optional

from bootstrap_curve.core.errors import AuthorizationError


class OwnerAuthorization:
    """Проверки владельца и pauser."""

    def __init__(self, owner: str, pauser: Optional[str] = None):
        if not owner:
            raise AuthorizationError("owner address must be non-empty")
        self._owner = owner
        self._pauser = pauser

    @property
    def owner(self) -> str:
        return self._owner

    @property
    def pauser(self) -> Optional[str]:
        return self._pauser

    def require_owner(self, caller: str, action: str) -> None:
        """
        Raises:
            AuthorizationError: Если caller не владелец
        """
        if caller != self._owner:
            raise AuthorizationError(f"{action}: caller {caller} is not the owner")

    def require_pauser(self, caller: str) -> None:
        """
        Raises:
            AuthorizationError: Если pauser не назначен или caller не pauser
        """
        if self._pauser is None:
            raise AuthorizationError("pause: no pauser configured")
        if caller != self._pauser:
            raise AuthorizationError(f"pause: caller {caller} is not the pauser")

    def set_pauser(self, caller: str, pauser: Optional[str]) -> None:
        self.require_owner(caller, "set_pauser")
        self._pauser = pauser

    def transfer_ownership(self, caller: str, new_owner: str) -> None:
        self.require_owner(caller, "transfer_ownership")
        if not new_owner:
            raise AuthorizationError("new owner address must be non-empty")
        self._owner = new_owner
