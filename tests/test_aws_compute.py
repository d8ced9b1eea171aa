"""Tests for AWS EC2 instance control."""

from unittest.mock import patch, MagicMock
import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from hosting.aws.compute import Compute
from hosting.base.exceptions import (
    ComputeError,
    InstanceNotFoundError,
    InstancePermissionError,
    InstanceStateError,
)


def _client_error(code: str, msg: str = "error") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": msg}}, "op")


@pytest.fixture
def svc():
    with patch("hosting.aws.compute.boto3") as mock_boto:
        mock_client = MagicMock()
        mock_boto.client.return_value = mock_client
        instance = Compute("us-east-1")
        yield instance, mock_client, mock_boto


class TestInit:
    def test_region(self, svc):
        _, _, boto = svc
        boto.client.assert_called_once_with("ec2", region_name="us-east-1")


# --- start / stop / reboot ---

class TestInstanceControl:
    def test_start_success(self, svc):
        inst, client, _ = svc
        client.start_instances.return_value = {"StartingInstances": [{"InstanceId": "i-abc"}]}
        ack = inst.start_instance("i-abc")
        client.start_instances.assert_called_once_with(InstanceIds=["i-abc"])
        assert ack["StartingInstances"][0]["InstanceId"] == "i-abc"

    def test_stop_success(self, svc):
        inst, client, _ = svc
        client.stop_instances.return_value = {"StoppingInstances": []}
        assert inst.stop_instance("i-abc") == {"StoppingInstances": []}
        client.stop_instances.assert_called_once_with(InstanceIds=["i-abc"])

    def test_reboot_success(self, svc):
        inst, client, _ = svc
        client.reboot_instances.return_value = {"ResponseMetadata": {"HTTPStatusCode": 200}}
        inst.reboot_instance("i-abc")
        client.reboot_instances.assert_called_once_with(InstanceIds=["i-abc"])

    def test_start_not_found(self, svc):
        inst, client, _ = svc
        client.start_instances.side_effect = _client_error("InvalidInstanceID.NotFound")
        with pytest.raises(InstanceNotFoundError):
            inst.start_instance("i-missing")

    def test_stop_malformed(self, svc):
        inst, client, _ = svc
        client.stop_instances.side_effect = _client_error("InvalidInstanceID.Malformed")
        with pytest.raises(InstanceNotFoundError):
            inst.stop_instance("bogus")

    def test_reboot_wrong_state(self, svc):
        inst, client, _ = svc
        client.reboot_instances.side_effect = _client_error("IncorrectInstanceState")
        with pytest.raises(InstanceStateError):
            inst.reboot_instance("i-abc")

    def test_start_unauthorized(self, svc):
        inst, client, _ = svc
        client.start_instances.side_effect = _client_error("UnauthorizedOperation")
        with pytest.raises(InstancePermissionError):
            inst.start_instance("i-abc")

    def test_generic_error(self, svc):
        inst, client, _ = svc
        client.stop_instances.side_effect = _client_error("InternalError")
        with pytest.raises(ComputeError) as excinfo:
            inst.stop_instance("i-abc")
        assert type(excinfo.value) is ComputeError
        assert isinstance(excinfo.value.__cause__, ClientError)

    def test_connection_error(self, svc):
        inst, client, _ = svc
        client.start_instances.side_effect = EndpointConnectionError(endpoint_url="https://ec2")
        with pytest.raises(ComputeError):
            inst.start_instance("i-abc")

    def test_single_attempt(self, svc):
        inst, client, _ = svc
        client.start_instances.side_effect = _client_error("RequestLimitExceeded")
        with pytest.raises(ComputeError):
            inst.start_instance("i-abc")
        assert client.start_instances.call_count == 1


class TestControlDispatch:
    @pytest.mark.parametrize("verb,method", [
        ("start", "start_instances"),
        ("stop", "stop_instances"),
        ("reboot", "reboot_instances"),
    ])
    def test_dispatch(self, svc, verb, method):
        inst, client, _ = svc
        inst.control(verb, "i-abc")
        getattr(client, method).assert_called_once_with(InstanceIds=["i-abc"])

    def test_unknown_verb(self, svc):
        inst, _, _ = svc
        with pytest.raises(ValueError, match="Unsupported control verb"):
            inst.control("terminate", "i-abc")


class TestClientCreation:
    def test_no_region(self):
        from botocore.exceptions import NoRegionError

        with patch("hosting.aws.compute.boto3") as mock_boto:
            mock_boto.client.side_effect = NoRegionError()
            with pytest.raises(ComputeError, match="EC2 client"):
                Compute()
