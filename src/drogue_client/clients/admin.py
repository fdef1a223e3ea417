"""Implementation of the admin API, managing the members and the ownership of applications."""

from __future__ import annotations

from typing import TYPE_CHECKING

from drogue_client.clients.api_client import APIClient
from drogue_client.resources.admin import Members, TransferOwnership

if TYPE_CHECKING:
    from drogue_client.utils.api_types import ApplicationName, UserId


class AdminClient(APIClient):
    """AdminClient class that implements methods from the 'api/admin/v1alpha1' API."""

    api_name = "admin"

    def url(self, application: ApplicationName, resource: str) -> str:
        return self.api_url("apps", application, resource)

    def get_members(self, application: ApplicationName, **kwargs) -> Members | None:
        """Returns the members of the application, None if it does not exist."""
        return self.read(self.url(application, "members"), Members, **kwargs)

    def update_members(self, application: ApplicationName, members: Members, **kwargs) -> bool:
        """Replaces the members of the application, False if it does not exist.

        Args:
            application: the application name
            members: the new members, with the resource version of the members that were read
            kwargs: gets passed to :py:meth:`APIClient.api_request`
        """
        return self.update(self.url(application, "members"), members, **kwargs)

    def initiate_app_transfer(self, application: ApplicationName, username: UserId, **kwargs) -> bool:
        """Offers the application to a new owner, who needs to accept the transfer."""
        return self.update(
            self.url(application, "transfer-ownership"), TransferOwnership(new_user=username), **kwargs
        )

    def cancel_app_transfer(self, application: ApplicationName, **kwargs) -> bool:
        """Cancels a pending transfer, False if the application does not exist."""
        return self.delete(self.url(application, "transfer-ownership"), **kwargs)

    def accept_app_transfer(self, application: ApplicationName, **kwargs) -> bool:
        """Accepts the transfer of the application to the current user."""
        return self.update(self.url(application, "accept-ownership"), **kwargs)

    def read_app_transfer(self, application: ApplicationName, **kwargs) -> TransferOwnership | None:
        """Returns the pending transfer of the application, None if there is none."""
        return self.read(self.url(application, "transfer-ownership"), TransferOwnership, **kwargs)
