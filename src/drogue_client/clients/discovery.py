"""Implementation of the discovery endpoints, finding the endpoints and version of a Drogue Cloud instance."""

from __future__ import annotations

from urllib.parse import urlsplit

from drogue_client.clients.api_client import APIClient
from drogue_client.errors.service import UnexpectedResponseError
from drogue_client.resources.discovery import DrogueVersion, Endpoints
from drogue_client.utils.clients import build_url


class DiscoveryClient(APIClient):
    """DiscoveryClient class for the '.well-known' endpoints and the 'api/console/v1alpha1/info' API."""

    api_name = "console"

    def well_known_url(self, name: str) -> str:
        return build_url(self.context.host.url, ".well-known", name)

    def get_public_endpoints(self, **kwargs) -> Endpoints:
        """Returns the public endpoints, the request is sent without credentials."""
        return self._read_required(self.well_known_url("drogue-endpoints"), Endpoints, authenticated=False, **kwargs)

    def get_authenticated_endpoints(self, **kwargs) -> Endpoints:
        """Returns the endpoints, including those only visible to authenticated users."""
        return self._read_required(self.api_url("info"), Endpoints, **kwargs)

    def get_drogue_cloud_version(self, **kwargs) -> DrogueVersion:
        """Returns the version of the Drogue Cloud instance, the request is sent without credentials."""
        return self._read_required(self.well_known_url("drogue-version"), DrogueVersion, authenticated=False, **kwargs)

    def get_sso_url(self, **kwargs) -> str | None:
        """Returns the issuer url of the single sign-on service, None if it is unknown or not a valid url."""
        issuer_url = self.get_authenticated_endpoints(**kwargs).issuer_url
        if issuer_url is None:
            return None
        parts = urlsplit(issuer_url)
        if not parts.scheme or not parts.netloc:
            return None
        return issuer_url

    def _read_required(self, url: str, target: type, **kwargs):  # noqa: ANN202
        if (result := self.read(url, target, **kwargs)) is None:
            msg = f"{url} was not found."
            raise UnexpectedResponseError(info=msg)
        return result
