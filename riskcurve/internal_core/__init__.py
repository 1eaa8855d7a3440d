from .config import RiskCurveConfig, load_config
from .selection_store import DEFAULT_SELECTION, InMemorySelectionStore

__all__ = ["DEFAULT_SELECTION", "InMemorySelectionStore", "RiskCurveConfig", "load_config"]
