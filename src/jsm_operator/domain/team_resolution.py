"""Resolution of a team resource to its catalog team identifier."""

from __future__ import annotations

from dataclasses import replace
from logging import getLogger
from typing import TYPE_CHECKING

from .outcome import Action, TeamOutcome

if TYPE_CHECKING:
    from .model import TeamResource
    from .ports.catalog import CatalogGateway

log = getLogger(__name__)


def resolve_team_id(team: TeamResource, gateway: CatalogGateway) -> str:
    """Return the catalog team ID for ``team``.

    Precedence: explicit ``spec.id``, then the ID cached in status, then a name lookup
    against the catalog. The lookup raises ``TeamNotFoundError`` when nothing matches.
    """

    if team.spec.id:
        return team.spec.id
    if team.status.id:
        return team.status.id
    return gateway.find_team_id_by_name(team.lookup_name)


def converge_team(team: TeamResource, gateway: CatalogGateway) -> TeamOutcome:
    """Resolve ``team`` and decide whether its status needs one write."""

    resolved_id = resolve_team_id(team, gateway)
    if team.status.id == resolved_id and team.status.observed_generation == team.generation:
        log.debug("Team %s already resolved to %s", team.key, resolved_id)
        return TeamOutcome(action=Action.UP_TO_DATE, team_id=resolved_id)

    status = replace(team.status, id=resolved_id, observed_generation=team.generation)
    return TeamOutcome(action=Action.TEAM_RESOLVED, team_id=resolved_id, status=status)
