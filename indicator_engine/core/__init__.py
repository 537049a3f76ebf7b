from indicator_engine.core.config import IndicatorConfig, get_indicator_config

__all__ = ["IndicatorConfig", "get_indicator_config"]
