"""Endpoint resolution for the E*Trade REST API.

Hosts and paths come from two lookup tables keyed by module kind and
environment. Token issuance (the ``oauth`` module) lives on the production
host in every environment and uses its own path layout without the
``.json`` suffix.
"""

from typing import Dict, Tuple, Union

from etrade.core.config.enums import ApiModule, Environment
from etrade.domains.oauth.types import EndpointDescriptor

AUTH = "auth"
API = "api"

HOSTS: Dict[Tuple[str, Environment], str] = {
    (AUTH, Environment.SANDBOX): "etws.etrade.com",
    (AUTH, Environment.PRODUCTION): "etws.etrade.com",
    (API, Environment.SANDBOX): "etwssandbox.etrade.com",
    (API, Environment.PRODUCTION): "etws.etrade.com",
}

PATH_TEMPLATES: Dict[Tuple[str, Environment], str] = {
    (AUTH, Environment.SANDBOX): "/{module}/{action}",
    (AUTH, Environment.PRODUCTION): "/{module}/rest/{action}",
    (API, Environment.SANDBOX): "/{module}/sandbox/rest/{action}.json",
    (API, Environment.PRODUCTION): "/{module}/rest/{action}.json",
}

AUTHORIZE_HOST = "us.etrade.com"
AUTHORIZE_PATH = "/e/t/etws/authorize"
AUTHORIZE_URL = f"https://{AUTHORIZE_HOST}{AUTHORIZE_PATH}"


def _module(module: Union[ApiModule, str]) -> ApiModule:
    try:
        return ApiModule(module)
    except ValueError:
        raise ValueError(f"Unknown E*Trade API module: {module!r}") from None


def _kind(module: ApiModule) -> str:
    return AUTH if module is ApiModule.OAUTH else API


class EndpointResolver:
    """Maps (module, action, environment) onto a concrete host and path."""

    def __init__(self, environment: Environment = Environment.SANDBOX) -> None:
        self.environment = Environment(environment)

    @staticmethod
    def resolve_host(module: Union[ApiModule, str], environment: Environment) -> str:
        return HOSTS[(_kind(_module(module)), Environment(environment))]

    @staticmethod
    def resolve_path(
        module: Union[ApiModule, str], action: str, environment: Environment
    ) -> str:
        api_module = _module(module)
        template = PATH_TEMPLATES[(_kind(api_module), Environment(environment))]
        return template.format(module=api_module.value, action=action)

    def resolve(self, module: Union[ApiModule, str], action: str) -> EndpointDescriptor:
        """Resolve `module`/`action` in the environment this resolver is bound to."""
        return EndpointDescriptor(
            host=self.resolve_host(module, self.environment),
            path=self.resolve_path(module, action, self.environment),
        )
