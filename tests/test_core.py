"""Tests for configuration and structured logging."""

import json
import logging
import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

from hosting.base.config import ControlConfig, DeploymentConfig, load_deployment_config
from hosting.base.logger import HostingLogger, StructuredFormatter

_ENV_VARS = [
    "SERVER_HOSTING_PREFIX",
    "SERVER_HOSTING_ACCOUNT",
    "SERVER_HOSTING_REGION",
    "SERVER_HOSTING_VPC_ID",
    "SERVER_HOSTING_SUBNET_ID",
    "SERVER_HOSTING_AVAILABILITY_ZONE",
    "SERVER_HOSTING_BUCKET_NAME",
    "SERVER_HOSTING_RESTART_API",
    "SERVER_HOSTING_USE_EXPERIMENTAL_BUILD",
    "SERVER_HOSTING_INSTALL_SCRIPT",
    "CDK_DEFAULT_ACCOUNT",
    "CDK_DEFAULT_REGION",
    "INSTANCE_ID",
    "AWS_REGION",
    "AWS_DEFAULT_REGION",
]

BASE = {"prefix": "Satisfactory", "account": "123456789012", "region": "us-east-1"}


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)


# ══════════════════════════════════════════════════════════════════════
# DeploymentConfig
# ══════════════════════════════════════════════════════════════════════

class TestDeploymentConfig:
    def test_explicit_values(self):
        cfg = DeploymentConfig(**BASE, vpc_id="vpc-1", restart_api=True)
        assert cfg.prefix == "Satisfactory"
        assert cfg.vpc_id == "vpc-1"
        assert cfg.restart_api is True
        assert cfg.use_experimental_build is False
        assert cfg.install_script == Path("scripts/install.sh")

    def test_optional_ids_default_to_none(self):
        cfg = DeploymentConfig(**BASE)
        assert cfg.vpc_id is None
        assert cfg.subnet_id is None
        assert cfg.availability_zone is None
        assert cfg.bucket_name is None

    def test_blank_ids_are_absent(self):
        cfg = DeploymentConfig(**BASE, vpc_id="", subnet_id="  ", bucket_name="")
        assert cfg.vpc_id is None
        assert cfg.subnet_id is None
        assert cfg.bucket_name is None

    def test_env_fallback(self, monkeypatch):
        monkeypatch.setenv("SERVER_HOSTING_PREFIX", "Env")
        monkeypatch.setenv("SERVER_HOSTING_ACCOUNT", "210987654321")
        monkeypatch.setenv("SERVER_HOSTING_REGION", "eu-west-1")
        monkeypatch.setenv("SERVER_HOSTING_BUCKET_NAME", "saves")
        monkeypatch.setenv("SERVER_HOSTING_RESTART_API", "true")
        cfg = DeploymentConfig()
        assert cfg.prefix == "Env"
        assert cfg.account == "210987654321"
        assert cfg.region == "eu-west-1"
        assert cfg.bucket_name == "saves"
        assert cfg.restart_api is True

    def test_cdk_default_env_fallback(self, monkeypatch):
        monkeypatch.setenv("CDK_DEFAULT_ACCOUNT", "111122223333")
        monkeypatch.setenv("CDK_DEFAULT_REGION", "ap-southeast-2")
        cfg = DeploymentConfig(prefix="Sf")
        assert cfg.account == "111122223333"
        assert cfg.region == "ap-southeast-2"

    def test_explicit_beats_env(self, monkeypatch):
        monkeypatch.setenv("SERVER_HOSTING_REGION", "eu-west-1")
        cfg = DeploymentConfig(**BASE)
        assert cfg.region == "us-east-1"

    def test_missing_prefix(self):
        with pytest.raises(ValidationError):
            DeploymentConfig(account="123456789012", region="us-east-1")

    def test_bad_account(self):
        with pytest.raises(ValidationError):
            DeploymentConfig(prefix="Sf", account="12345", region="us-east-1")

    def test_bad_prefix(self):
        with pytest.raises(ValidationError):
            DeploymentConfig(prefix="1 bad", account="123456789012", region="us-east-1")

    def test_unknown_field(self):
        with pytest.raises(ValidationError):
            DeploymentConfig(**BASE, instance_type="t3.micro")

    def test_frozen(self):
        cfg = DeploymentConfig(**BASE)
        with pytest.raises(ValidationError):
            cfg.prefix = "Other"

    def test_stack_name(self):
        assert DeploymentConfig(**BASE).stack_name == "SatisfactoryServerHostingStack"


class TestLoadDeploymentConfig:
    def test_dict(self):
        cfg = load_deployment_config(dict(BASE))
        assert isinstance(cfg, DeploymentConfig)

    def test_json_string(self):
        cfg = load_deployment_config(json.dumps({**BASE, "use_experimental_build": True}))
        assert cfg.use_experimental_build is True

    def test_json_not_object(self):
        with pytest.raises(ValueError, match="JSON object"):
            load_deployment_config("[1, 2]")

    def test_none_reads_env(self, monkeypatch):
        monkeypatch.setenv("SERVER_HOSTING_PREFIX", "Env")
        monkeypatch.setenv("CDK_DEFAULT_ACCOUNT", "123456789012")
        monkeypatch.setenv("CDK_DEFAULT_REGION", "us-east-2")
        assert load_deployment_config(None).region == "us-east-2"


class TestControlConfig:
    def test_explicit_values(self):
        cfg = ControlConfig(instance_id="i-abc", region_name="us-west-2")
        assert cfg.instance_id == "i-abc"
        assert cfg.region_name == "us-west-2"

    def test_env_fallback(self, monkeypatch):
        monkeypatch.setenv("INSTANCE_ID", "i-env")
        monkeypatch.setenv("AWS_DEFAULT_REGION", "eu-central-1")
        cfg = ControlConfig()
        assert cfg.instance_id == "i-env"
        assert cfg.region_name == "eu-central-1"

    def test_region_optional(self):
        assert ControlConfig(instance_id="i-abc").region_name is None

    def test_instance_required(self):
        with pytest.raises(ValidationError):
            ControlConfig()


# ══════════════════════════════════════════════════════════════════════
# Logger
# ══════════════════════════════════════════════════════════════════════

class TestHostingLogger:
    def test_log_operation(self, capfd):
        logger = HostingLogger("test_hosting")
        logger.logger.setLevel(logging.DEBUG)
        logger.info("test message", component="handler", operation="start", instance_id="i-1")
        captured = capfd.readouterr()
        entry = json.loads(captured.err.strip().splitlines()[-1])
        assert entry["message"] == "test message"
        assert entry["operation"] == "start"
        assert entry["instance_id"] == "i-1"
        assert entry["request_id"]

    def test_explicit_request_id(self, capfd):
        logger = HostingLogger("test_hosting_rid")
        logger.warning("careful", request_id="req-42")
        captured = capfd.readouterr()
        assert '"request_id": "req-42"' in captured.err

    def test_structured_formatter(self):
        fmt = StructuredFormatter()
        record = logging.LogRecord(
            name="test", level=logging.INFO, pathname="", lineno=0,
            msg="hi", args=(), exc_info=None,
        )
        record.component = "resolution"
        record.request_id = "abc"
        output = fmt.format(record)
        assert '"component": "resolution"' in output
        assert '"request_id": "abc"' in output
        assert "instance_id" not in output

    def test_formatter_exception(self):
        fmt = StructuredFormatter()
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = logging.LogRecord(
                name="test", level=logging.ERROR, pathname="", lineno=0,
                msg="failed", args=(), exc_info=sys.exc_info(),
            )
        assert json.loads(fmt.format(record))["exception"] == "boom"
