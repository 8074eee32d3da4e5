from .locale import AlternatesResponse, ClientConfigSnapshot, LocaleRoute, SwitcherPosition, SwitchResponse

# Define the public API of this module
__all__ = [
    "AlternatesResponse",
    "ClientConfigSnapshot",
    "LocaleRoute",
    "SwitcherPosition",
    "SwitchResponse",
]
