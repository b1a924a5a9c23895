from dataclasses import dataclass


@dataclass
class HistoryConfig:
    max_length: int = 25      # past + present entries kept before the oldest is dropped
    debug_mode: bool = False  # log the full history listing after every change

    def __post_init__(self):
        if self.max_length < 2:
            raise ValueError(f"max_length must be at least 2, got {self.max_length}")
