from __future__ import annotations

import base64
import json
import logging
import os
import typing as tp
from pathlib import Path

from pydantic import ValidationError

from ..const import CONF_ENCRYPTION, CONF_SUBSTRATE, CONFIG_FILE, ENV_ENCRYPTION_KEY, ENV_PREFIX
from ..encryption_utils import SecretRecord
from ..exceptions import (
    AccountNotFound,
    InvalidConfigFormat,
    NoActiveAccount,
    SeedPhraseNotFound,
)
from .schema import SECTION_MODELS, HippiusConfig

_LOGGER = logging.getLogger(__name__)

_MISSING = object()


class ConfigStore:
    """JSON config file with environment variable overrides.

    Values are read from ``HIPPIUS_<SECTION>_<KEY>`` first, then from the
    file. The file is validated against :class:`HippiusConfig` on every load.
    """

    def __init__(
        self,
        path: tp.Union[str, Path, None] = None,
        environ: tp.Optional[tp.Mapping[str, str]] = None,
    ) -> None:
        self.path: Path = Path(path) if path is not None else CONFIG_FILE
        self._environ: tp.Mapping[str, str] = os.environ if environ is None else environ

    def load(self) -> HippiusConfig:
        if not self.path.exists():
            _LOGGER.debug(f"Config file {self.path} does not exist, creating default one")
            config = HippiusConfig()
            self.save(config)
            return config
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise InvalidConfigFormat(f"{self.path} is not valid JSON") from e
        return self._validate(data)

    def save(self, config: HippiusConfig) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(config.model_dump(mode="json"), indent=2), encoding="utf-8")
        os.chmod(self.path, 0o600)
        _LOGGER.debug(f"Config saved to {self.path}")

    def get_all(self) -> tp.Dict[str, tp.Any]:
        return self.load().model_dump(mode="json")

    def get_value(self, section: str, key: str, default: tp.Any = None) -> tp.Any:
        """Get a config value.

        :param section: Section of the config, e.g. "ipfs"
        :param key: Key within the section
        :param default: Returned when the value is not set anywhere

        :return: Value from the environment, the file, or the default
        """

        value = self._get_env_value(section, key)
        if value is not _MISSING:
            return value
        section_data = self.get_all().get(section)
        if isinstance(section_data, dict) and section_data.get(key) is not None:
            return section_data[key]
        return default

    def set_value(self, section: str, key: str, value: tp.Any) -> None:
        data = self.get_all()
        section_data = data.setdefault(section, {})
        if not isinstance(section_data, dict):
            raise InvalidConfigFormat(f"section {section} is not an object")
        section_data[key] = value
        self.save(self._validate(data))

    def get_active_account(self) -> tp.Optional[str]:
        return self.get_value(CONF_SUBSTRATE, "active_account")

    def set_active_account(self, account_name: str) -> None:
        self.set_value(CONF_SUBSTRATE, "active_account", account_name)

    def get_account_address(self, account_name: tp.Optional[str] = None) -> tp.Optional[str]:
        name = account_name or self.get_active_account()
        if not name:
            return None
        account = self.load().substrate.accounts.get(name)
        if account is None:
            return None
        return account.ss58_address

    def get_encryption_key(self) -> tp.Optional[bytes]:
        """Get the content encryption key from the environment or the config.

        :return: Raw key bytes or None if no valid key is configured
        """

        env_key = self._environ.get(ENV_ENCRYPTION_KEY)
        if env_key:
            try:
                return base64.b64decode(env_key, validate=True)
            except ValueError:
                _LOGGER.warning("Invalid encryption key format in environment variable")
        config_key = self.get_value(CONF_ENCRYPTION, "encryption_key")
        if config_key:
            try:
                return base64.b64decode(config_key, validate=True)
            except ValueError:
                _LOGGER.warning("Invalid encryption key format in config file")
        return None

    def set_encryption_key(self, key: bytes) -> None:
        self.set_value(CONF_ENCRYPTION, "encryption_key", base64.b64encode(key).decode("ascii"))

    def set_seed_phrase(
        self,
        seed_phrase: str,
        encode: bool = False,
        password: tp.Optional[str] = None,
        account_name: tp.Optional[str] = None,
    ) -> None:
        """Store a seed phrase for the account, replacing any previous one.

        :param seed_phrase: Mnemonic seed phrase
        :param encode: Encrypt the seed phrase with the password
        :param password: Password, required if encode is True
        :param account_name: Account name, active account if None
        """

        name = self._resolve_account_name(account_name)
        if encode:
            record = SecretRecord.encoded(seed_phrase, password)
        else:
            record = SecretRecord.plaintext(seed_phrase)
        data = self.get_all()
        accounts = data[CONF_SUBSTRATE].setdefault("accounts", {})
        accounts.setdefault(name, {}).update(record.to_dict())
        self.save(self._validate(data))
        _LOGGER.debug(f"Seed phrase for account {name} saved, encoded: {encode}")

    def get_seed_phrase(
        self, account_name: tp.Optional[str] = None, password: tp.Optional[str] = None
    ) -> str:
        """Get the seed phrase of an account, decrypting it if needed.

        :param account_name: Account name, active account if None
        :param password: Password, required if the seed phrase is encoded

        :return: Seed phrase
        """

        name = self._resolve_account_name(account_name)
        account = self.load().substrate.accounts.get(name)
        if account is None:
            raise AccountNotFound(name)
        if not account.seed_phrase:
            raise SeedPhraseNotFound(name)
        record = SecretRecord(account.seed_phrase, account.seed_phrase_encoded)
        return record.reveal(password)

    def _resolve_account_name(self, account_name: tp.Optional[str]) -> str:
        name = account_name or self.get_active_account()
        if not name:
            raise NoActiveAccount
        return name

    def _get_env_value(self, section: str, key: str) -> tp.Any:
        env_key = f"{ENV_PREFIX}_{section.upper()}_{key.upper()}"
        raw = self._environ.get(env_key)
        if raw is None:
            return _MISSING
        model = SECTION_MODELS.get(section)
        if model is None or key not in model.model_fields:
            return raw
        try:
            return getattr(model.model_validate({key: raw}), key)
        except ValidationError:
            _LOGGER.warning(f"Ignoring invalid value of environment variable {env_key}")
            return _MISSING

    def _validate(self, data: tp.Any) -> HippiusConfig:
        if not isinstance(data, dict):
            raise InvalidConfigFormat("top level must be an object")
        try:
            return HippiusConfig.model_validate(data)
        except ValidationError as e:
            fields = ", ".join(".".join(str(part) for part in err["loc"]) for err in e.errors())
            raise InvalidConfigFormat(f"invalid fields: {fields}") from None
