"""FakeConfigObserver — records config domain events for assertion in tests."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ConfigLoadedEvent:
    name: str
    domains: list[str]


class FakeConfigObserver:
    def __init__(self) -> None:
        self.loaded: list[ConfigLoadedEvent] = []
        self.temperature_warnings: list[float] = []

    def config_loaded(self, name: str, domains: list[str]) -> None:
        self.loaded.append(ConfigLoadedEvent(name=name, domains=domains))

    def config_judge_temperature_warning(self, temperature: float) -> None:
        self.temperature_warnings.append(temperature)
