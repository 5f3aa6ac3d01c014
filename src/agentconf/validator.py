"""Cross-parameter validation for agent configurations."""

import logging

from agentconf.config.models import AgentConfig
from agentconf.errors import ValidationError

logger = logging.getLogger(__name__)


def _unset_pair_message(attribute: str, requires: str) -> str:
    return f"puppet has attribute {attribute} set but has {requires} unset"


def validate(cfg: AgentConfig) -> None:
    """Reject contradictory parameter combinations.

    Raises:
        ValidationError: On the first violated rule, naming the attribute pair.
    """
    if cfg.splaylimit and not cfg.splay:
        raise ValidationError(
            _unset_pair_message("splaylimit", "splay"),
            attributes=("splaylimit", "splay"),
        )

    if cfg.use_srv_records and not cfg.srv_domain:
        raise ValidationError(
            _unset_pair_message("use_srv_records", "srv_domain"),
            attributes=("use_srv_records", "srv_domain"),
        )

    logger.debug("Agent configuration passed validation")
