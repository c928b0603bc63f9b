"""
MediaConvert templates — provisioning and reconciliation.

Zero SDK construction. Every function receives a MediaConvert client (see
app.mediaconvert.MediaConvertClient) and a TemplateConfig via parameters.

Failure policy: the first rejected call aborts the whole flow and its error
propagates unchanged. Nothing already applied is rolled back, and no call is
retried beyond what the SDK does on its own.
"""
from __future__ import annotations

import logging

from app.exceptions import EndpointNotFound
from app.mediaconvert import MediaConvertClient
from app.templates.catalog import (
    build_catalog,
    build_desired_catalog,
    desired_variant,
    partition_catalog,
    preset_for_template,
)
from app.templates.constants import SUCCESS
from app.templates.schemas import (
    CatalogEntry,
    CatalogItem,
    PresetDefinition,
    TemplateConfig,
    TemplateDefinition,
)

logger = logging.getLogger(__name__)

_LIST_PAGE_SIZE = 20


# ── Endpoint ─────────────────────────────────────────────────────────────────

async def resolve_endpoint(
    client: MediaConvertClient,
    config: TemplateConfig | None = None,
) -> dict[str, str]:
    """Discover the account-specific MediaConvert endpoint.

    The config is optional: the EndPoint custom resource carries no StackName.
    """
    resp = await client.describe_endpoints()
    endpoints = resp.get("Endpoints") or []
    if not endpoints:
        raise EndpointNotFound()
    endpoint_url = endpoints[0]["Url"]
    if config is None:
        logger.info("MediaConvert endpoint: %s", endpoint_url)
    else:
        logger.info("MediaConvert endpoint for stack %s: %s", config.stack_name, endpoint_url)
    return {"EndpointUrl": endpoint_url}


# ── Provisioning primitives ──────────────────────────────────────────────────

async def create_preset(client: MediaConvertClient, preset: PresetDefinition) -> None:
    await client.create_preset(**preset.to_request())
    logger.info("preset created:: %s", preset.name)


async def create_template(client: MediaConvertClient, template: TemplateDefinition) -> None:
    await client.create_job_template(**template.to_request())
    logger.info("template created:: %s", template.name)


async def delete_preset(client: MediaConvertClient, name: str) -> None:
    await client.delete_preset(Name=name)
    logger.info("preset deleted:: %s", name)


async def delete_template(client: MediaConvertClient, name: str) -> None:
    await client.delete_job_template(Name=name)
    logger.info("template deleted:: %s", name)


async def _create_catalog(client: MediaConvertClient, items: list[CatalogItem]) -> None:
    # A template can only reference a preset that already exists
    for item in items:
        await create_preset(client, item.preset)
        await create_template(client, item.template)


async def _delete_catalog(client: MediaConvertClient, items: list[CatalogItem]) -> None:
    # A preset cannot be deleted while a template still uses it
    for item in items:
        await delete_template(client, item.template.name)
        for name in item.template.preset_names:
            await delete_preset(client, name)


# ── Remote catalog ───────────────────────────────────────────────────────────

async def list_templates(
    client: MediaConvertClient,
    config: TemplateConfig,
) -> list[CatalogEntry]:
    """Read every custom job template, following NextToken to the last page."""
    params: dict = {"ListBy": "NAME", "Order": "ASCENDING", "MaxResults": _LIST_PAGE_SIZE}
    entries: list[CatalogEntry] = []
    while True:
        resp = await client.list_job_templates(**params)
        entries.extend(CatalogEntry.model_validate(t) for t in resp.get("JobTemplates", []))
        next_token = resp.get("NextToken")
        if not next_token:
            break
        params["NextToken"] = next_token

    logger.debug("Listed %d job templates for stack %s", len(entries), config.stack_name)
    return entries


# ── Flows ────────────────────────────────────────────────────────────────────

async def create_templates(client: MediaConvertClient, config: TemplateConfig) -> str:
    """Create every preset and job template for the configured variant."""
    await _create_catalog(client, build_desired_catalog(config))
    return SUCCESS


async def reconcile(client: MediaConvertClient, config: TemplateConfig) -> str:
    """Bring the remote catalog to the configured variant.

    Managed templates carrying the other variant's suffix are deleted (with
    their presets) before anything is created. The full desired set is then
    created again, including templates that already carry the desired suffix.

    A stale template is deleted before its preset. If that preset is missing
    the DeletePreset error aborts the flow with the template already gone and
    nothing created in its place.
    """
    desired = desired_variant(config.enable_media_package)
    entries = await list_templates(client, config)
    stale, current = partition_catalog(entries, config.stack_name, desired)

    if stale:
        logger.info(
            "Stack %s: replacing %d stale template(s) with %s",
            config.stack_name, len(stale), desired.value,
        )
    if current:
        logger.info(
            "Stack %s: %d template(s) already %s, re-creating",
            config.stack_name, len(current), desired.value,
        )

    for entry in stale:
        await delete_template(client, entry.name)
        stale_preset = preset_for_template(entry.name, config.stack_name)
        if stale_preset is not None:
            await delete_preset(client, stale_preset)

    await _create_catalog(client, build_catalog(config.stack_name, desired))
    return SUCCESS


update_templates = reconcile


async def delete_templates(client: MediaConvertClient, config: TemplateConfig) -> str:
    """Delete every job template and preset of the configured variant."""
    await _delete_catalog(client, build_desired_catalog(config))
    return SUCCESS
