"""Console input package."""

from habit_logger.collector.input_collector import InputCollector

__all__ = ["InputCollector"]
