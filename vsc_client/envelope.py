"""
Transaction envelope construction.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from .exceptions import MissingIntentError
from .models import CallContractTx, TransactionContainer, TransactionDbType, TransactionHeaders

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HeaderShape:
    """
    Header fields chosen by the signing mode.

    Attributes:
        required_auth: Identity that must authorize the transaction
        nonce: Replay-protection nonce, None for modes that rely on the
            underlying chain's own replay protection
    """
    required_auth: str
    nonce: Optional[int] = None


def build_envelope(
    intent: Optional[Union[CallContractTx, Dict[str, Any]]],
    shape: HeaderShape
) -> TransactionContainer:
    """
    Wrap an intent in a versioned transaction container.

    Args:
        intent: Contract call intent (model or plain dict)
        shape: Header shape supplied by the active signing strategy

    Returns:
        Immutable TransactionContainer

    Raises:
        MissingIntentError: If no intent has been set
    """
    if intent is None:
        raise MissingIntentError("No TX specified!")
    if not isinstance(intent, CallContractTx):
        intent = CallContractTx.model_validate(intent)

    headers = TransactionHeaders(
        type=TransactionDbType.INPUT,
        nonce=shape.nonce,
        required_auths=[shape.required_auth],
    )
    return TransactionContainer(headers=headers, tx=intent)
