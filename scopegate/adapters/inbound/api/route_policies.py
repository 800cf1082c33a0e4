# scopegate/adapters/inbound/api/route_policies.py

"""
Per-route access declarations.

Every API route is looked up here by its route name. Routes that are not
declared require an authenticated caller and no particular scope.
"""

import logging
from typing import Dict, Iterable, Mapping, Optional

from scopegate.domain.models.access_model import RoutePolicy

logger = logging.getLogger(__name__)

DEFAULT_POLICY = RoutePolicy()


class RoutePolicyTable:
    """
    Mapping of route name to RoutePolicy.

    Declarations can be passed at construction or added builder-style:

        table.declare("issue_token", public=True)
        table.declare("list_reports", scopes={"reports:read"})
    """

    def __init__(self, policies: Optional[Mapping[str, RoutePolicy]] = None,
                 default: RoutePolicy = DEFAULT_POLICY):
        self._policies: Dict[str, RoutePolicy] = dict(policies or {})
        self.default = default

    def declare(self, route_name: str, public: bool = False, scopes: Iterable[str] = ()) -> "RoutePolicyTable":
        if route_name in self._policies:
            raise ValueError(f"Route '{route_name}' already has an access policy")
        self._policies[route_name] = RoutePolicy.build(public=public, scopes=scopes)
        return self

    def lookup(self, route_name: Optional[str]) -> RoutePolicy:
        if route_name is None:
            return self.default
        return self._policies.get(route_name, self.default)


# Access table of the API
route_policies = (
    RoutePolicyTable()
    .declare("docs_redirect", public=True)
    .declare("health", public=True)
    .declare("issue_token", public=True)
    .declare("whoami")
)
