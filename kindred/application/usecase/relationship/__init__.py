"""Relationship use cases."""

from .get_mutual_relationships import (
    GetMutualRelationshipsRequest,
    GetMutualRelationshipsResponse,
    GetMutualRelationshipsUseCase,
    LastMessagePreview,
    RelationshipItem,
)

__all__ = [
    "GetMutualRelationshipsRequest",
    "GetMutualRelationshipsResponse",
    "GetMutualRelationshipsUseCase",
    "LastMessagePreview",
    "RelationshipItem",
]
