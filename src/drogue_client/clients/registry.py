"""Implementation of the device registry API, managing applications and devices."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import TYPE_CHECKING

from drogue_client.clients.api_client import APIClient
from drogue_client.resources.application import Application
from drogue_client.resources.device import Device, DeviceSpecGatewaySelector
from drogue_client.resources.labels import labels_query
from drogue_client.translator import Decoded

if TYPE_CHECKING:
    from collections.abc import Iterable

    from drogue_client.resources.labels import LabelSelector, Operation
    from drogue_client.utils.api_types import ApplicationName, DeviceName

LOGGER = logging.getLogger(__name__)


class RegistryClient(APIClient):
    """RegistryClient class that implements methods from the 'api/registry/v1alpha1' API."""

    api_name = "registry"

    def url(self, application: ApplicationName | None = None, device: DeviceName | None = None) -> str:
        """Returns the url of the applications, an application, its devices or a device.

        Args:
            application: the application name, None for the list of applications
            device: the device name, an empty string for the list of devices of the application
        """
        segments = ["apps"]
        if application:
            segments.append(application)
            if device is not None:
                segments.extend(("devices", device))
        return self.api_url(*segments)

    def list_apps(
        self,
        labels: LabelSelector | Operation | Iterable[str] | None = None,
        **kwargs,
    ) -> list[Application] | None:
        """Lists the applications the user has access to.

        Args:
            labels: only return applications matching the label selector
            kwargs: gets passed to :py:meth:`APIClient.api_request`
        """
        return self.read(self.url(), list[Application], params=labels_query(labels), **kwargs)

    def get_app(self, application: ApplicationName, **kwargs) -> Application | None:
        """Returns the application, None if it does not exist (or is not visible to the user)."""
        return self.read(self.url(application), Application, **kwargs)

    def create_app(self, application: Application, **kwargs) -> None:
        """Creates the application.

        Raises:
            ConflictError: if an application with that name already exists
        """
        self.create(self.url(), application, **kwargs)

    def update_app(self, application: Application, **kwargs) -> bool:
        """Updates the application, False if it does not exist.

        Raises:
            PreconditionFailedError: if the application was modified in the meantime
        """
        return self.update(self.url(application.metadata.name), application, **kwargs)

    def delete_app(self, application: ApplicationName, **kwargs) -> bool:
        """Deletes the application, False if it did not exist."""
        return self.delete(self.url(application), **kwargs)

    def list_devices(
        self,
        application: ApplicationName,
        labels: LabelSelector | Operation | Iterable[str] | None = None,
        **kwargs,
    ) -> list[Device] | None:
        """Lists the devices of an application, None if the application does not exist.

        Args:
            application: the application name
            labels: only return devices matching the label selector
            kwargs: gets passed to :py:meth:`APIClient.api_request`
        """
        return self.read(self.url(application, ""), list[Device], params=labels_query(labels), **kwargs)

    def get_device(self, application: ApplicationName, device: DeviceName, **kwargs) -> Device | None:
        """Returns the device, None if it does not exist."""
        return self.read(self.url(application, device), Device, **kwargs)

    def get_devices(
        self,
        application: ApplicationName,
        devices: Iterable[DeviceName],
        max_workers: int | None = None,
        **kwargs,
    ) -> list[Device]:
        """Fetches multiple devices concurrently.

        Devices which do not exist are left out, the result is in the order the requests completed.

        Args:
            application: the application name
            devices: the device names
            max_workers: the number of threads, defaults to :py:attr:`Config.max_workers`
            kwargs: gets passed to :py:meth:`APIClient.api_request`

        Raises:
            DrogueClientError: the first error of any of the requests
        """
        names = list(devices)
        if not names:
            return []
        with ThreadPoolExecutor(max_workers=max_workers or self.context.config.max_workers) as pool:
            futures = [pool.submit(self.get_device, application, name, **kwargs) for name in names]
            return [device for future in as_completed(futures) if (device := future.result()) is not None]

    def get_device_and_gateways(
        self, application: ApplicationName, device: DeviceName, **kwargs
    ) -> tuple[Device, list[Device]] | None:
        """Returns the device and the devices which may act as its gateway.

        Gateways which do not exist are left out, as is a gateway selector which can't be decoded.

        Returns:
            None if the device does not exist
        """
        if (found := self.get_device(application, device, **kwargs)) is None:
            return None
        selector = found.section(DeviceSpecGatewaySelector)
        if not isinstance(selector, Decoded):
            if selector is not None:
                LOGGER.debug("Ignoring invalid gateway selector of %s/%s: %s", application, device, selector.error)
            return found, []
        return found, self.get_devices(application, selector.value.match_names, **kwargs)

    def create_device(self, device: Device, **kwargs) -> None:
        """Creates the device.

        Raises:
            ConflictError: if the device already exists
        """
        self.create(self.url(device.metadata.application, ""), device, **kwargs)

    def update_device(self, device: Device, **kwargs) -> bool:
        """Updates the device, False if it does not exist."""
        return self.update(self.url(device.metadata.application, device.metadata.name), device, **kwargs)

    def delete_device(self, application: ApplicationName, device: DeviceName, **kwargs) -> bool:
        """Deletes the device, False if it did not exist."""
        return self.delete(self.url(application, device), **kwargs)
