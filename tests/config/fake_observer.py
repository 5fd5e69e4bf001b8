"""Fake ConfigObserver for use in tests — records events without mocking."""


class FakeConfigObserver:
    def __init__(self) -> None:
        self.loaded: list[dict[str, str | int]] = []
        self.parallelism_warnings: list[int] = []

    def config_loaded(self, name: str, knowledge_bases: int) -> None:
        self.loaded.append({"name": name, "knowledge_bases": knowledge_bases})

    def config_parallelism_warning(self, parallelism: int) -> None:
        self.parallelism_warnings.append(parallelism)
