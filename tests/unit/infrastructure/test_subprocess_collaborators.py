"""Unit tests for the subprocess-backed prover and encryptor adapters.

The collaborator binaries are replaced by small shell scripts written to
tmp_path, so the real argument and environment contract is exercised.
"""

from __future__ import annotations

import asyncio
import stat
from pathlib import Path

import pytest

from attestation_platform.domain.errors import (
    ArtifactMissingError,
    EncryptionFailedError,
    ProvingFailedError,
)
from attestation_platform.infrastructure.adapters import (
    FileArtifactStore,
    SubprocessEncryptionEngine,
    SubprocessProvingEngine,
    parse_verdict,
)
from attestation_platform.infrastructure.adapters.process_runner import run_process

PROVER_SCRIPT = """#!/bin/sh
echo "$@" > args.txt
echo "$KEYS_DIR" > keys_dir.txt
printf 'proof-for-%s' "$3" > proof.bin
echo "proving complete"
echo "verdict: passed"
"""

SILENT_PROVER_SCRIPT = """#!/bin/sh
printf 'proof' > proof.bin
"""

FAILING_PROVER_SCRIPT = """#!/bin/sh
echo "cannot read ciphertext" >&2
exit 3
"""

NO_PROOF_SCRIPT = """#!/bin/sh
echo "verdict: passed"
"""

SLOW_PROVER_SCRIPT = """#!/bin/sh
sleep 5
printf 'proof' > proof.bin
"""

ENCRYPTOR_SCRIPT = """#!/bin/sh
case "$1" in
  generate-keys)
    mkdir -p "$3"
    printf 'public-%s' "$2" > "$3/public.key"
    printf 'private' > "$3/private.key"
    ;;
  create-attestation)
    printf 'ct-%s-' "$2" > "$5"
    cat "$4" >> "$5"
    ;;
  *)
    exit 64
    ;;
esac
"""


def _script(tmp_path: Path, name: str, body: str) -> str:
    path = tmp_path / name
    path.write_text(body)
    path.chmod(path.stat().st_mode | stat.S_IEXEC)
    return str(path)


@pytest.fixture
def artifacts(artifact_store: FileArtifactStore) -> list[Path]:
    return artifact_store.write_payloads(0, [b"reserves", b"liabilities"])


class TestParseVerdict:
    @pytest.mark.parametrize(
        ("stdout", "expected"),
        [
            ("verdict: passed\n", True),
            ("Verdict = FAILED\n", False),
            ("step 1\nverdict: failed\nverdict: passed\n", True),
            ("proof written\n", None),
            ("", None),
        ],
    )
    def test_parse(self, stdout: str, expected: bool | None) -> None:
        assert parse_verdict(stdout) is expected


class TestRunProcess:
    async def test_collects_output(self) -> None:
        outcome = await run_process(["sh", "-c", "echo out; echo err >&2; exit 4"])

        assert outcome.returncode == 4
        assert outcome.stdout.strip() == "out"
        assert outcome.stderr_tail == "err"

    async def test_missing_executable_raises_oserror(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            await run_process([str(tmp_path / "does-not-exist")])

    async def test_cancellation_kills_child(self) -> None:
        task = asyncio.create_task(run_process(["sleep", "30"]))
        await asyncio.sleep(0.2)

        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await asyncio.wait_for(task, timeout=5)


class TestSubprocessProvingEngine:
    async def test_successful_run(
        self, tmp_path: Path, artifact_store: FileArtifactStore, artifacts: list[Path]
    ) -> None:
        prover = SubprocessProvingEngine(
            _script(tmp_path, "prover.sh", PROVER_SCRIPT), artifact_store
        )

        proof = await prover.prove("GreaterThan", artifacts)

        assert proof.passed is True
        assert proof.proof_bytes == b"proof-for-GreaterThan"
        assert proof.proof_path == artifact_store.work_dir / "proof.bin"
        args = (artifact_store.work_dir / "args.txt").read_text().split()
        assert args == [
            "--prove",
            "--operation",
            "GreaterThan",
            "--att-file1",
            str(artifacts[0]),
            "--att-file2",
            str(artifacts[1]),
        ]
        keys_dir = (artifact_store.work_dir / "keys_dir.txt").read_text().strip()
        assert keys_dir == str(artifact_store.keys_dir)

    async def test_verdict_falls_back_to_plaintext(
        self, tmp_path: Path, artifact_store: FileArtifactStore, artifacts: list[Path]
    ) -> None:
        prover = SubprocessProvingEngine(
            _script(tmp_path, "prover.sh", SILENT_PROVER_SCRIPT),
            artifact_store,
            plaintext_values=(500, 900),
        )

        proof = await prover.prove("GreaterThan", artifacts)

        assert proof.passed is False

    async def test_missing_verdict_without_plaintext_fails(
        self, tmp_path: Path, artifact_store: FileArtifactStore, artifacts: list[Path]
    ) -> None:
        prover = SubprocessProvingEngine(
            _script(tmp_path, "prover.sh", SILENT_PROVER_SCRIPT), artifact_store
        )

        with pytest.raises(ProvingFailedError):
            await prover.prove("GreaterThan", artifacts)

    async def test_nonzero_exit_reports_stderr(
        self, tmp_path: Path, artifact_store: FileArtifactStore, artifacts: list[Path]
    ) -> None:
        prover = SubprocessProvingEngine(
            _script(tmp_path, "prover.sh", FAILING_PROVER_SCRIPT), artifact_store
        )

        with pytest.raises(ProvingFailedError) as exc_info:
            await prover.prove("GreaterThan", artifacts)

        assert exc_info.value.exit_code == 3
        assert exc_info.value.stderr_tail == "cannot read ciphertext"

    async def test_missing_proof_file(
        self, tmp_path: Path, artifact_store: FileArtifactStore, artifacts: list[Path]
    ) -> None:
        prover = SubprocessProvingEngine(
            _script(tmp_path, "prover.sh", NO_PROOF_SCRIPT), artifact_store
        )

        with pytest.raises(ArtifactMissingError):
            await prover.prove("GreaterThan", artifacts)

    async def test_stale_proof_is_not_reused(
        self, tmp_path: Path, artifact_store: FileArtifactStore, artifacts: list[Path]
    ) -> None:
        (artifact_store.work_dir / "proof.bin").write_bytes(b"stale")
        prover = SubprocessProvingEngine(
            _script(tmp_path, "prover.sh", NO_PROOF_SCRIPT), artifact_store
        )

        with pytest.raises(ArtifactMissingError):
            await prover.prove("GreaterThan", artifacts)

    async def test_unusable_proof_path_is_artifact_missing(
        self, tmp_path: Path, artifact_store: FileArtifactStore, artifacts: list[Path]
    ) -> None:
        (artifact_store.work_dir / "proof.bin").mkdir()
        prover = SubprocessProvingEngine(
            _script(tmp_path, "prover.sh", PROVER_SCRIPT), artifact_store
        )

        with pytest.raises(ArtifactMissingError):
            await prover.prove("GreaterThan", artifacts)

    async def test_missing_input_artifact(
        self, tmp_path: Path, artifact_store: FileArtifactStore
    ) -> None:
        prover = SubprocessProvingEngine(
            _script(tmp_path, "prover.sh", PROVER_SCRIPT), artifact_store
        )

        with pytest.raises(ArtifactMissingError):
            await prover.prove("GreaterThan", [tmp_path / "absent.bin"])

    async def test_unknown_binary(
        self, tmp_path: Path, artifact_store: FileArtifactStore, artifacts: list[Path]
    ) -> None:
        prover = SubprocessProvingEngine(str(tmp_path / "no-prover"), artifact_store)

        with pytest.raises(ProvingFailedError):
            await prover.prove("GreaterThan", artifacts)

    async def test_timeout_cancels_run(
        self, tmp_path: Path, artifact_store: FileArtifactStore, artifacts: list[Path]
    ) -> None:
        prover = SubprocessProvingEngine(
            _script(tmp_path, "prover.sh", SLOW_PROVER_SCRIPT), artifact_store
        )

        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(prover.prove("GreaterThan", artifacts), timeout=0.3)


class TestSubprocessEncryptionEngine:
    async def test_generate_keys_and_encrypt(self, tmp_path: Path) -> None:
        encryptor = SubprocessEncryptionEngine(_script(tmp_path, "enc.sh", ENCRYPTOR_SCRIPT))
        keys_dir = tmp_path / "work" / "keys"

        public_key = await encryptor.generate_keys(keys_dir, 512)
        payload = await encryptor.encrypt_value(
            2, public_key, 750_000, tmp_path / "work" / "attestations" / "attestation_2.bin"
        )

        assert public_key.read_text() == "public-512"
        assert payload == b"ct-2-750000"
        values_file = tmp_path / "work" / "attestations" / "attestation_2.values.txt"
        assert values_file.read_text() == "750000"

    async def test_encrypt_requires_public_key(self, tmp_path: Path) -> None:
        encryptor = SubprocessEncryptionEngine(_script(tmp_path, "enc.sh", ENCRYPTOR_SCRIPT))

        with pytest.raises(ArtifactMissingError):
            await encryptor.encrypt_value(1, tmp_path / "missing.key", 1, tmp_path / "a.bin")

    async def test_failure_raises_encryption_error(self, tmp_path: Path) -> None:
        encryptor = SubprocessEncryptionEngine(
            _script(tmp_path, "enc.sh", "#!/bin/sh\necho 'bad key size' >&2\nexit 2\n")
        )

        with pytest.raises(EncryptionFailedError) as exc_info:
            await encryptor.generate_keys(tmp_path / "keys", 7)

        assert exc_info.value.exit_code == 2
        assert "bad key size" in exc_info.value.stderr_tail
