"""Risk engine -- volatility bands, leverage caps and trade scoring."""

from paradex_bot.risk.engine import RiskEngine, compute_momentum, compute_volatility

__all__ = ["RiskEngine", "compute_momentum", "compute_volatility"]
