"""GraphQL documents sent to the catalog, keyed by operation name."""

from __future__ import annotations

GET_SERVICE_BY_NAME = "GetServiceByName"
CREATE_SERVICE = "CreateDevOpsService"
GET_TIER_ID_BY_LEVEL = "GetTierIDByLevel"
UPDATE_SERVICE = "UpdateDevOpsService"
CREATE_TEAM_RELATIONSHIP = "CreateDevOpsServiceAndOpsgenieTeamRelationship"
RESOLVE_TEAM_ID_BY_NAME = "ResolveOpsgenieTeamIDByName"

GET_SERVICE_BY_NAME_QUERY = """
query GetServiceByName($cloudId: String!, $name: String!) {
  devOpsServices(cloudId: $cloudId, filter: {nameContains: $name}) {
    edges {
      node {
        id
        name
        revision
      }
    }
  }
}
"""

CREATE_SERVICE_MUTATION = """
mutation CreateDevOpsService($input: CreateDevOpsServiceInput!) {
  createDevOpsService(input: $input) {
    success
    errors {
      message
    }
    service {
      id
      name
      revision
      serviceTier {
        id
        level
      }
    }
  }
}
"""

GET_TIER_ID_BY_LEVEL_QUERY = """
query GetTierIDByLevel($cloudId: String!) {
  devOpsServiceTiers(cloudId: $cloudId) {
    id
    level
  }
}
"""

UPDATE_SERVICE_MUTATION = """
mutation UpdateDevOpsService($input: UpdateDevOpsServiceInput!) {
  updateDevOpsService(input: $input) {
    success
    errors {
      message
    }
    service {
      id
      name
      revision
      serviceTier {
        id
        level
      }
      serviceType {
        key
      }
    }
  }
}
"""

CREATE_TEAM_RELATIONSHIP_MUTATION = """
mutation CreateDevOpsServiceAndOpsgenieTeamRelationship(
  $cloudId: ID!, $serviceId: ID!, $teamId: ID!
) {
  createDevOpsServiceAndOpsgenieTeamRelationship(
    input: {cloudId: $cloudId, serviceId: $serviceId, opsgenieTeamId: $teamId}
  ) {
    success
    errors {
      message
    }
    serviceAndOpsgenieTeamRelationship {
      id
    }
  }
}
"""

RESOLVE_TEAM_ID_BY_NAME_QUERY = """
query ResolveOpsgenieTeamIDByName($cloudId: ID!) {
  opsgenie {
    allOpsgenieTeams(cloudId: $cloudId) {
      edges {
        node {
          id
          name
        }
      }
    }
  }
}
"""
