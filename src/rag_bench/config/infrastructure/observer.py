"""Structlog implementation of the ConfigObserver port."""

import structlog


class StructlogConfigObserver:
    """Delegates config domain events to structlog.

    Satisfies the ConfigObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def config_loaded(self, name: str, knowledge_bases: int) -> None:
        self._log.info(
            "config.loaded", name=name, knowledge_bases=knowledge_bases
        )

    def config_parallelism_warning(self, parallelism: int) -> None:
        self._log.warning(
            "config.parallelism_warning",
            parallelism=parallelism,
            message="Each question issues up to four LLM calls; "
            "high parallelism multiplies provider load",
        )
