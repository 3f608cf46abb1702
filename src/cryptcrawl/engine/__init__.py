from .turn import System, TurnContext, TurnPipeline

__all__ = ["System", "TurnContext", "TurnPipeline"]
