"""Provider credentials: environment defaults plus user-entered values.

User-entered values are kept in a small JSON file so they survive restarts,
the local counterpart of browser storage. Environment values win when both
are present.
"""

import json
from pathlib import Path

from docreview.config.settings import Settings
from docreview.credentials.exceptions import CredentialStoreError
from docreview.logging.logger import Log
from docreview.providers.exceptions import ProviderNotConfiguredError


class CredentialStore:
    """Resolves, stores and invalidates per-provider API keys."""

    def __init__(
        self,
        defaults: dict[str, str] | None = None,
        path: Path | None = None,
    ) -> None:
        self._defaults = {
            provider: value.strip()
            for provider, value in (defaults or {}).items()
            if value and value.strip()
        }
        self._path = path
        self._user = self._load()
        self._suppressed: set[str] = set()

    @classmethod
    def from_settings(cls, settings: Settings) -> "CredentialStore":
        return cls(defaults=settings.provider_api_keys(), path=settings.credentials_path)

    def is_configured(self, provider: str) -> bool:
        return bool(self._resolve(provider))

    def get(self, provider: str) -> str:
        """Return the effective credential for a provider.

        Raises:
            ProviderNotConfiguredError: if neither source has a value.
        """
        credential = self._resolve(provider)
        if not credential:
            raise ProviderNotConfiguredError(provider)
        return credential

    def set(self, provider: str, credential: str) -> None:
        """Store a user-supplied credential; an empty value removes it."""
        value = credential.strip()
        if value:
            self._user[provider] = value
        else:
            self._user.pop(provider, None)
        self._save()
        Log.info("Credential updated", provider=provider, configured=bool(value))

    def invalidate(self, provider: str) -> None:
        """Forget a rejected credential so the user is asked for a new one.

        The environment default is suppressed for the rest of the process; a
        value entered afterwards through set() is used instead. The change
        always applies in memory; a failure to persist it is only logged.
        """
        self._suppressed.add(provider)
        if self._user.pop(provider, None) is not None:
            try:
                self._save()
            except CredentialStoreError as exc:
                Log.warning(f"Invalidated credential not persisted: {exc}", provider=provider)
        Log.warning("Credential invalidated", provider=provider)

    def configured_providers(self) -> list[str]:
        providers = dict.fromkeys([*self._defaults, *self._user])
        return [p for p in providers if self.is_configured(p)]

    def _resolve(self, provider: str) -> str:
        if provider not in self._suppressed:
            default = self._defaults.get(provider, "")
            if default:
                return default
        return self._user.get(provider, "")

    def _load(self) -> dict[str, str]:
        if self._path is None or not self._path.exists():
            return {}
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            Log.warning(f"Ignoring unreadable credentials file {self._path}: {exc}")
            return {}
        if not isinstance(raw, dict):
            Log.warning(f"Ignoring malformed credentials file {self._path}")
            return {}
        return {
            str(provider): value.strip()
            for provider, value in raw.items()
            if isinstance(value, str) and value.strip()
        }

    def _save(self) -> None:
        if self._path is None:
            return
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(self._user, indent=2), encoding="utf-8")
        except OSError as exc:
            raise CredentialStoreError(f"Failed to save credentials: {exc}") from exc
