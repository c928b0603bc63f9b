"""
AWS MediaConvert — client construction for template provisioning.

The template engine never builds SDK clients itself.  It talks to anything
satisfying ``MediaConvertClient``: an aioboto3 MediaConvert client in
production, a recording fake in tests.
"""
from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any, Protocol

import aioboto3

if TYPE_CHECKING:
    from app.config import Settings


class MediaConvertClient(Protocol):
    """The subset of the MediaConvert API used by the template engine."""

    async def describe_endpoints(self, **kwargs: Any) -> dict[str, Any]: ...

    async def create_preset(self, **kwargs: Any) -> dict[str, Any]: ...

    async def create_job_template(self, **kwargs: Any) -> dict[str, Any]: ...

    async def list_job_templates(self, **kwargs: Any) -> dict[str, Any]: ...

    async def delete_job_template(self, **kwargs: Any) -> dict[str, Any]: ...

    async def delete_preset(self, **kwargs: Any) -> dict[str, Any]: ...


def _mc_session(settings: Settings) -> aioboto3.Session:
    return aioboto3.Session(
        aws_access_key_id=settings.aws_access_key_id or None,
        aws_secret_access_key=settings.aws_secret_access_key or None,
        region_name=settings.aws_region,
    )


@asynccontextmanager
async def mediaconvert_client(
    settings: Settings,
    endpoint_url: str | None = None,
) -> AsyncIterator[MediaConvertClient]:
    """Open a MediaConvert client, bound to the account endpoint when given."""
    session = _mc_session(settings)
    async with session.client("mediaconvert", endpoint_url=endpoint_url or None) as mc:
        yield mc
