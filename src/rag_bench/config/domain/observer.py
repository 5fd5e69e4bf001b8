"""Observer port for the config domain — defines events in domain language."""

from typing import Protocol


class ConfigObserver(Protocol):
    def config_loaded(self, name: str, knowledge_bases: int) -> None: ...

    def config_parallelism_warning(self, parallelism: int) -> None: ...
