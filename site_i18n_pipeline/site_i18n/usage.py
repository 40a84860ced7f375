from dataclasses import dataclass

@dataclass
class ProviderUsage:
    # DeepL bills per source character
    cost_per_million: float = 20.0
    requests: int = 0
    strings: int = 0
    chars: int = 0

    def add(self, strings: int, chars: int) -> None:
        self.requests += 1
        self.strings += strings
        self.chars += chars

    @property
    def est_cost(self) -> float:
        return (self.chars / 1_000_000.0) * self.cost_per_million
