from dataclasses import dataclass


UNKNOWN_MODEL = 'Unknown'


@dataclass(frozen=True)
class BootDevice:
    path: str  # Linux: '/dev/sda' style; Windows: '\\.\PHYSICALDRIVE0'
    model: str = UNKNOWN_MODEL
    size: str = ''

    def __post_init__(self) -> None:
        if not self.path:
            raise ValueError('BootDevice.path must not be empty')
        if not self.model:
            object.__setattr__(self, 'model', UNKNOWN_MODEL)

    def __str__(self) -> str:
        return f"{self.model} {self.size} ({self.path})"
