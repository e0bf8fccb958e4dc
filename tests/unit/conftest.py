"""Pytest configuration and shared fixtures for unit tests."""

import json
from typing import Any, Callable, Dict

import pytest
from stackresults import ClientConfig, Result, ServiceClient

IMAGE_ENDPOINT = "https://image.example.com/v2"
VOLUME_ENDPOINT = "https://volume.example.com/v2/5ef70662f8b34079a6eddb8da9d75fe8"


@pytest.fixture
def make_result() -> Callable[..., Result]:
    """Factory building a successful ``Result`` holding a payload encoded as JSON."""

    def _make_result(payload: Any, url: str = IMAGE_ENDPOINT + "/images") -> Result:
        return Result(body=json.dumps(payload).encode(), status_code=200, url=url)

    return _make_result


@pytest.fixture
def image_payload() -> Dict[str, Any]:
    """An image as returned by the image service, with three custom properties."""
    return {
        "status": "active",
        "name": "cirros-0.3.2-x86_64-disk",
        "tags": [],
        "container_format": "bare",
        "created_at": "2014-05-05T17:15:10Z",
        "disk_format": "qcow2",
        "updated_at": "2014-05-05T17:15:11Z",
        "visibility": "public",
        "self": "/v2/images/1bea47ed-f6a9-463b-b423-14b9cca9ad27",
        "min_disk": 0,
        "protected": False,
        "id": "1bea47ed-f6a9-463b-b423-14b9cca9ad27",
        "file": "/v2/images/1bea47ed-f6a9-463b-b423-14b9cca9ad27/file",
        "checksum": "64d7c1cd2b6f60c92c14662941cb7913",
        "owner": "5ef70662f8b34079a6eddb8da9d75fe8",
        "size": 13167616,
        "min_ram": 0,
        "schema": "/v2/schemas/image",
        "virtual_size": None,
        "hw_disk_bus": "scsi",
        "hw_disk_bus_model": "virtio-scsi",
        "hw_scsi_model": "virtio-scsi",
    }


@pytest.fixture
def volume_payload() -> Dict[str, Any]:
    """A volume as returned by the block storage service, unwrapped."""
    return {
        "volume_type": "lvmdriver-1",
        "created_at": "2015-09-17T03:32:29.000000",
        "bootable": "false",
        "name": "vol-001",
        "os-vol-host-attr:host": "host-001@lvmdriver-1#lvmdriver-1",
        "replication_status": "disabled",
        "consistencygroup_id": None,
        "source_volid": None,
        "volume_image_metadata": {
            "container_format": "bare",
            "image_name": "centos",
            "min_ram": 0,
        },
        "snapshot_id": None,
        "metadata": {"foo": "bar"},
        "id": "d32019d3-bc6e-4319-9c1d-6722fc136a22",
        "size": 75,
        "user_id": "ff1ce52c03ab433aaba9108c2e3ef541",
        "attachments": [
            {
                "server_id": "83ec2e3b-4321-422b-8706-a84185f52a0a",
                "attachment_id": "05551600-a936-4d4a-ba42-79a037c1c91a",
                "attached_at": "2016-08-06T14:48:20.000000",
                "host_name": "foobar",
                "volume_id": "d6cacb1a-8b59-4c88-ad90-d70ebb82bb75",
                "device": "/dev/vdc",
                "id": "d6cacb1a-8b59-4c88-ad90-d70ebb82bb75",
            }
        ],
        "encrypted": False,
        "description": None,
        "availability_zone": "nova",
        "status": "available",
        "multiattach": False,
    }


@pytest.fixture
def image_client() -> ServiceClient:
    """Client for the image endpoint that never sleeps between retries."""
    config = ClientConfig(max_retries=2, backoff_factor=0)
    return ServiceClient(IMAGE_ENDPOINT, token="secret-token", config=config)


@pytest.fixture
def volume_client() -> ServiceClient:
    """Client for the block storage endpoint that never sleeps between retries."""
    config = ClientConfig(max_retries=2, backoff_factor=0)
    return ServiceClient(VOLUME_ENDPOINT, token="secret-token", config=config)
