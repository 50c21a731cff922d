"""Interaction use cases."""

from .approve_ping import ApprovePingRequest, ApprovePingResponse, ApprovePingUseCase
from .create_or_update_interaction import (
    CreateOrUpdateInteractionRequest,
    CreateOrUpdateInteractionResponse,
    CreateOrUpdateInteractionUseCase,
)
from .decline_ping import DeclinePingRequest, DeclinePingResponse, DeclinePingUseCase
from .get_received_interactions import (
    GetReceivedInteractionsRequest,
    GetReceivedInteractionsResponse,
    GetReceivedInteractionsUseCase,
)
from .get_sent_interactions import (
    GetSentInteractionsRequest,
    GetSentInteractionsResponse,
    GetSentInteractionsUseCase,
    InteractionItem,
)

__all__ = [
    "ApprovePingRequest",
    "ApprovePingResponse",
    "ApprovePingUseCase",
    "CreateOrUpdateInteractionRequest",
    "CreateOrUpdateInteractionResponse",
    "CreateOrUpdateInteractionUseCase",
    "DeclinePingRequest",
    "DeclinePingResponse",
    "DeclinePingUseCase",
    "GetReceivedInteractionsRequest",
    "GetReceivedInteractionsResponse",
    "GetReceivedInteractionsUseCase",
    "GetSentInteractionsRequest",
    "GetSentInteractionsResponse",
    "GetSentInteractionsUseCase",
    "InteractionItem",
]
