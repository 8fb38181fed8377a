import base64
import json

import pytest

from jobscope.storage.memory_store import InMemoryKeyValueStore
from jobscope.vault import Corrupt, CryptoCorruptError, DeviceCipher, EncryptedBlob, SecureVault
from jobscope.vault.cipher import IV_LENGTH, SALT_LENGTH

KEY = "openaiApiKey"
SECRET = "sk-test-1234567890abcdefghij"


def _cipher(password: str = "device-fingerprint") -> DeviceCipher:
    return DeviceCipher(password, iterations=1_000)


def _flip_first_byte(value: str) -> str:
    raw = bytearray(base64.b64decode(value))
    raw[0] ^= 0xFF
    return base64.b64encode(bytes(raw)).decode("ascii")


class TestDeviceCipher:
    @pytest.mark.asyncio
    async def test_roundtrip(self) -> None:
        cipher = _cipher()
        blob = await cipher.encrypt(SECRET)
        assert await cipher.decrypt(blob) == SECRET

    @pytest.mark.asyncio
    async def test_blob_lengths(self) -> None:
        blob = await _cipher().encrypt(SECRET)
        assert len(base64.b64decode(blob.iv)) == IV_LENGTH
        assert len(base64.b64decode(blob.salt)) == SALT_LENGTH
        assert SECRET not in blob.ciphertext

    @pytest.mark.asyncio
    async def test_fresh_salt_and_iv_per_call(self) -> None:
        cipher = _cipher()
        first = await cipher.encrypt(SECRET)
        second = await cipher.encrypt(SECRET)
        assert first.iv != second.iv
        assert first.salt != second.salt
        assert first.ciphertext != second.ciphertext

    @pytest.mark.asyncio
    async def test_other_device_cannot_decrypt(self) -> None:
        blob = await _cipher("device-a").encrypt(SECRET)
        with pytest.raises(CryptoCorruptError, match="Authentication failed"):
            await _cipher("device-b").decrypt(blob)

    @pytest.mark.asyncio
    async def test_rejects_wrong_iv_length(self) -> None:
        blob = await _cipher().encrypt(SECRET)
        short_iv = base64.b64encode(b"\x00" * 8).decode("ascii")
        with pytest.raises(CryptoCorruptError, match=r"Invalid salt \(16\) or IV \(8\) length"):
            await _cipher().decrypt(EncryptedBlob(blob.ciphertext, short_iv, blob.salt))

    @pytest.mark.asyncio
    async def test_rejects_bad_base64(self) -> None:
        blob = await _cipher().encrypt(SECRET)
        with pytest.raises(CryptoCorruptError, match="not valid base64"):
            await _cipher().decrypt(EncryptedBlob("%%%", blob.iv, blob.salt))

    def test_requires_password(self) -> None:
        with pytest.raises(ValueError):
            DeviceCipher("")


class TestSecureVault:
    @pytest.mark.asyncio
    async def test_save_stores_only_blob(self) -> None:
        store = InMemoryKeyValueStore()
        await SecureVault(store, _cipher()).save(KEY, SECRET)

        stored = store.snapshot()[KEY]
        assert set(stored) == {"ciphertext", "iv", "salt"}
        assert SECRET not in json.dumps(stored)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("secret", [
        SECRET,
        "",
        "Résumé of José Müller",
        "emoji \U0001F680 and \u2728",
        "\u5c65\u6b74\u66f8 \u30a8\u30f3\u30b8\u30cb\u30a2",
        "\u00e9" * 64,
    ])
    async def test_roundtrip(self, secret: str) -> None:
        vault = SecureVault(InMemoryKeyValueStore(), _cipher(), max_secret_length=64)
        await vault.save(KEY, secret)
        assert await vault.load(KEY) == secret

    @pytest.mark.asyncio
    async def test_absent_key_loads_none(self) -> None:
        assert await SecureVault(InMemoryKeyValueStore(), _cipher()).load(KEY) is None

    @pytest.mark.asyncio
    async def test_empty_string_loads_none(self) -> None:
        store = InMemoryKeyValueStore({KEY: ""})
        assert await SecureVault(store, _cipher()).load(KEY) is None

    @pytest.mark.asyncio
    async def test_tampered_iv_is_corrupt_and_removed(self) -> None:
        store = InMemoryKeyValueStore()
        vault = SecureVault(store, _cipher())
        blob = await vault.save(KEY, SECRET)
        tampered = EncryptedBlob(blob.ciphertext, _flip_first_byte(blob.iv), blob.salt)
        await store.set({KEY: tampered.to_dict()})

        result = await vault.load(KEY)

        assert isinstance(result, Corrupt)
        assert KEY not in store.snapshot()
        assert await vault.load(KEY) is None

    @pytest.mark.asyncio
    async def test_malformed_fields_are_corrupt(self) -> None:
        store = InMemoryKeyValueStore({KEY: {"ciphertext": 1, "iv": "x", "salt": "y"}})
        result = await SecureVault(store, _cipher()).load(KEY)
        assert isinstance(result, Corrupt)
        assert store.snapshot() == {}

    @pytest.mark.asyncio
    async def test_get_maps_corrupt_to_none(self) -> None:
        store = InMemoryKeyValueStore({KEY: {"ciphertext": "AA==", "iv": "AA==", "salt": "AA=="}})
        assert await SecureVault(store, _cipher()).get(KEY) is None

    @pytest.mark.asyncio
    async def test_legacy_single_field_object_yields_its_value(self) -> None:
        store = InMemoryKeyValueStore({KEY: {"apiKey": "sk-xyz"}})
        vault = SecureVault(store, _cipher())

        result = await vault.load(KEY)

        assert result == "sk-xyz"
        stored = store.snapshot()[KEY]
        assert set(stored) == {"ciphertext", "iv", "salt"}
        assert await vault.load(KEY) == result

    @pytest.mark.asyncio
    async def test_legacy_multi_field_object_is_kept_as_json(self) -> None:
        legacy = {"personalInfo": {"name": "Jane"}, "skills": {"technical": []}}
        store = InMemoryKeyValueStore({"pandaJobAnalyzerResume": legacy})
        vault = SecureVault(store, _cipher())

        result = await vault.load("pandaJobAnalyzerResume")

        assert result is not None
        assert json.loads(result) == legacy
        assert set(store.snapshot()["pandaJobAnalyzerResume"]) == {"ciphertext", "iv", "salt"}

    @pytest.mark.asyncio
    async def test_legacy_string_is_migrated(self) -> None:
        store = InMemoryKeyValueStore({KEY: SECRET})
        vault = SecureVault(store, _cipher())

        assert await vault.load(KEY) == SECRET
        assert set(store.snapshot()[KEY]) == {"ciphertext", "iv", "salt"}

    @pytest.mark.asyncio
    async def test_oversized_legacy_record_is_returned_unmigrated(self) -> None:
        store = InMemoryKeyValueStore({KEY: "x" * 20})
        vault = SecureVault(store, _cipher(), max_secret_length=10)

        assert await vault.load(KEY) == "x" * 20
        assert store.snapshot()[KEY] == "x" * 20

    @pytest.mark.asyncio
    async def test_rejects_non_string_secret(self) -> None:
        vault = SecureVault(InMemoryKeyValueStore(), _cipher())
        with pytest.raises(TypeError):
            await vault.save(KEY, 123)  # type: ignore[arg-type]

    @pytest.mark.asyncio
    async def test_rejects_oversized_secret(self) -> None:
        vault = SecureVault(InMemoryKeyValueStore(), _cipher(), max_secret_length=10)
        with pytest.raises(ValueError, match="maximum length"):
            await vault.save(KEY, "x" * 11)

    @pytest.mark.asyncio
    async def test_accepts_secret_at_limit(self) -> None:
        vault = SecureVault(InMemoryKeyValueStore(), _cipher(), max_secret_length=10)
        await vault.save(KEY, "x" * 10)
        assert await vault.load(KEY) == "x" * 10

    @pytest.mark.asyncio
    async def test_delete(self) -> None:
        store = InMemoryKeyValueStore()
        vault = SecureVault(store, _cipher())
        await vault.save(KEY, SECRET)
        await vault.delete(KEY)
        assert await vault.load(KEY) is None
