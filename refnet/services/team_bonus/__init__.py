"""Team volume bonus evaluation."""

from refnet.services.team_bonus.evaluator import (
    QualifiedBonus,
    TeamBonusEvaluator,
)


__all__ = ["QualifiedBonus", "TeamBonusEvaluator"]
