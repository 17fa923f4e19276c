"""
Pydantic models for the AWS API Gateway v1 (REST API) proxy event structure.

Reference: https://docs.aws.amazon.com/apigateway/latest/developerguide/set-up-lambda-proxy-integrations.html#api-gateway-simple-proxy-for-lambda-input-format

Used by the AWS adapter to read the event Lambda receives. API Gateway sends
null for empty maps, so every mapping here is optional.
"""

from typing import Dict, Any, Optional, List
from pydantic import BaseModel, ConfigDict


class ApiGatewayIdentity(BaseModel):
    """API Gateway Identity object."""

    sourceIp: Optional[str] = None
    userAgent: Optional[str] = None

    model_config = ConfigDict(extra="allow")


class ApiGatewayRequestContext(BaseModel):
    """API Gateway Request Context object."""

    identity: Optional[ApiGatewayIdentity] = None
    authorizer: Optional[Dict[str, Any]] = None
    requestId: Optional[str] = None
    stage: Optional[str] = None
    path: Optional[str] = None
    protocol: Optional[str] = None

    model_config = ConfigDict(extra="allow")


class APIGatewayProxyEvent(BaseModel):
    """
    AWS API Gateway Proxy Integration (v1) Event Structure

    Defines the structure of the event object received by Lambda functions.
    """

    resource: Optional[str] = None
    path: Optional[str] = None
    httpMethod: Optional[str] = None
    headers: Optional[Dict[str, str]] = None
    multiValueHeaders: Optional[Dict[str, List[str]]] = None
    queryStringParameters: Optional[Dict[str, str]] = None
    multiValueQueryStringParameters: Optional[Dict[str, List[str]]] = None
    pathParameters: Optional[Dict[str, str]] = None
    stageVariables: Optional[Dict[str, str]] = None
    requestContext: Optional[ApiGatewayRequestContext] = None
    body: Optional[str] = None
    isBase64Encoded: bool = False

    model_config = ConfigDict(extra="allow")
