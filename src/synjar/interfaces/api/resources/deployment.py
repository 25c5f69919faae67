"""Deployment mode endpoint."""

import falcon.asgi

from synjar.deployment import DeploymentConfig


class DeploymentResource:
    """GET /v1/deployment - how this instance is deployed."""

    def __init__(self, deployment_config: DeploymentConfig) -> None:
        self._config = deployment_config

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        resp.media = {
            "mode": self._config.get_mode().value,
            "email_configured": self._config.is_email_configured(),
        }
        resp.status = falcon.HTTP_200
