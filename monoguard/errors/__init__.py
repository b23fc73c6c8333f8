from __future__ import annotations


class MonoguardError(Exception): ...


class MonoguardSetupError(MonoguardError): ...


class MonoguardParseError(MonoguardError): ...


__all__ = ["MonoguardError", "MonoguardSetupError", "MonoguardParseError"]
