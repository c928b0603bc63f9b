from typing import Any

import pytest
from botocore.exceptions import ClientError

from app.templates.schemas import TemplateConfig


class FakeMediaConvert:
    """Records every MediaConvert call; raises the configured error per operation."""

    def __init__(
        self,
        *,
        templates: list[str] | None = None,
        endpoints: list[str] | None = None,
        errors: dict[str, Exception] | None = None,
        page_size: int = 20,
    ) -> None:
        self.templates = list(templates or [])
        self.endpoints = ["https://test.com"] if endpoints is None else endpoints
        self.errors = errors or {}
        self.page_size = page_size
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def _record(self, operation: str, params: dict[str, Any]) -> None:
        self.calls.append((operation, params))
        if operation in self.errors:
            raise self.errors[operation]

    async def describe_endpoints(self, **params: Any) -> dict[str, Any]:
        self._record("describe_endpoints", params)
        return {"Endpoints": [{"Url": url} for url in self.endpoints]}

    async def create_preset(self, **params: Any) -> dict[str, Any]:
        self._record("create_preset", params)
        return {"Preset": {"Name": params["Name"]}}

    async def create_job_template(self, **params: Any) -> dict[str, Any]:
        self._record("create_job_template", params)
        return {"JobTemplate": {"Name": params["Name"]}}

    async def list_job_templates(self, **params: Any) -> dict[str, Any]:
        self._record("list_job_templates", params)
        start = int(params.get("NextToken", 0))
        end = start + self.page_size
        resp: dict[str, Any] = {
            "JobTemplates": [{"Name": name, "Type": "CUSTOM"} for name in self.templates[start:end]],
        }
        if end < len(self.templates):
            resp["NextToken"] = str(end)
        return resp

    async def delete_job_template(self, **params: Any) -> dict[str, Any]:
        self._record("delete_job_template", params)
        return {}

    async def delete_preset(self, **params: Any) -> dict[str, Any]:
        self._record("delete_preset", params)
        return {}

    @property
    def operations(self) -> list[str]:
        return [operation for operation, _ in self.calls]

    def names(self, operation: str) -> list[str]:
        return [params["Name"] for op, params in self.calls if op == operation]


def client_error(operation: str, message: str = "ERROR") -> ClientError:
    return ClientError(
        {"Error": {"Code": "BadRequestException", "Message": message}},
        operation,
    )


@pytest.fixture
def config() -> TemplateConfig:
    return TemplateConfig(StackName="test", EndPoint="https://test.com", EnableMediaPackage="false")


@pytest.fixture
def media_package_config() -> TemplateConfig:
    return TemplateConfig(StackName="test", EndPoint="https://test.com", EnableMediaPackage="true")


@pytest.fixture
def fake_mc() -> FakeMediaConvert:
    return FakeMediaConvert()
