"""
AWS Lambda handler — CloudFormation custom resource for MediaConvert.

Triggered by CloudFormation for two logical resources:
  EndPoint               — Create: discover the account MediaConvert endpoint
  MediaConvertTemplates  — Create / Update / Delete the stack's presets and
                           job templates for the configured variant

Resource properties:
  Resource            — EndPoint | MediaConvertTemplates (the only EndPoint property)
  StackName           — prefix for every preset and template name
  EndPoint            — MediaConvert endpoint (templates only)
  EnableMediaPackage  — "true" selects the mvod variant, otherwise qvbr

Whatever happens, a SUCCESS/FAILED document is PUT to the pre-signed
ResponseURL so the stack operation never hangs.
"""
from __future__ import annotations

import asyncio
import json
import logging

import requests

from app.config import Settings
from app.exceptions import UnknownRequestType
from app.mediaconvert import mediaconvert_client
from app.templates.constants import CustomResource, RequestType
from app.templates.schemas import TemplateConfig
from app.templates.service import (
    create_templates,
    delete_templates,
    resolve_endpoint,
    update_templates,
)

logger = logging.getLogger()
logger.setLevel(logging.INFO)

_TEMPLATE_FLOWS = {
    RequestType.CREATE: create_templates,
    RequestType.UPDATE: update_templates,
    RequestType.DELETE: delete_templates,
}


def handler(event: dict, context: object) -> dict:
    """Lambda entry point — runs the requested operation and reports to CloudFormation."""
    settings = Settings()
    logger.setLevel(settings.log_level.upper())

    request_type = event.get("RequestType", "")
    properties = event.get("ResourceProperties", {})
    resource = properties.get("Resource", "")
    logger.info("Custom resource request: %s %s", request_type, resource)

    try:
        data = asyncio.run(_dispatch(request_type, resource, properties, settings))
        status, reason = "SUCCESS", None
    except Exception as exc:
        logger.exception("Custom resource %s %s failed", request_type, resource)
        data, status, reason = {}, "FAILED", str(exc)

    _send_response(event, context, status=status, data=data, reason=reason, settings=settings)
    return {"Status": status, "Data": data}


async def _dispatch(
    request_type: str,
    resource: str,
    properties: dict,
    settings: Settings,
) -> dict:
    try:
        request = RequestType(request_type)
    except ValueError:
        raise UnknownRequestType(request_type) from None

    if resource == CustomResource.ENDPOINT:
        if request is not RequestType.CREATE:
            return {}
        async with mediaconvert_client(settings) as mc:
            return await resolve_endpoint(mc)

    if resource == CustomResource.TEMPLATES:
        config = TemplateConfig.model_validate(properties)
        endpoint_url = config.endpoint or settings.mediaconvert_endpoint
        async with mediaconvert_client(settings, endpoint_url) as mc:
            await _TEMPLATE_FLOWS[request](mc, config)
        return {}

    logger.info("Nothing to do for resource %r", resource)
    return {}


def _send_response(
    event: dict,
    context: object,
    *,
    status: str,
    data: dict,
    reason: str | None,
    settings: Settings,
) -> None:
    """PUT the custom resource result to CloudFormation's pre-signed URL."""
    log_stream = getattr(context, "log_stream_name", "")
    body = {
        "Status": status,
        "Reason": reason or f"See the details in CloudWatch Log Stream: {log_stream}",
        "PhysicalResourceId": event.get("PhysicalResourceId") or event.get("LogicalResourceId", ""),
        "StackId": event.get("StackId", ""),
        "RequestId": event.get("RequestId", ""),
        "LogicalResourceId": event.get("LogicalResourceId", ""),
        "Data": data,
    }

    response_url = event.get("ResponseURL")
    if not response_url:
        logger.warning("No ResponseURL in event; skipping CloudFormation response")
        return

    try:
        resp = requests.put(
            response_url,
            data=json.dumps(body),
            headers={"Content-Type": ""},
            timeout=settings.callback_timeout_secs,
        )
        resp.raise_for_status()
        logger.info("CloudFormation response sent: %s", status)
    except requests.RequestException as exc:
        logger.error("Failed to send CloudFormation response: %s", exc)
