"""Unit tests for FileArtifactStore."""

from __future__ import annotations

from pathlib import Path

import pytest

from attestation_platform.domain.errors import ArtifactMissingError
from attestation_platform.infrastructure.adapters import FileArtifactStore


class TestFileArtifactStore:
    def test_layout(self, tmp_path: Path) -> None:
        store = FileArtifactStore(tmp_path / "work")

        store.ensure_directories()

        assert store.keys_dir.is_dir()
        assert store.attestations_dir.is_dir()
        assert store.public_key_path == tmp_path.resolve() / "work" / "keys" / "public.key"
        assert store.period_dir(3).name == "period_3"

    def test_payloads_written_byte_exact_in_order(self, tmp_path: Path) -> None:
        store = FileArtifactStore(tmp_path)
        payloads = [bytes(range(256)), b"\x00\xff" * 10]

        paths = store.write_payloads(5, payloads)

        assert [p.name for p in paths] == ["attestation_1.bin", "attestation_2.bin"]
        assert [p.read_bytes() for p in paths] == payloads
        assert all(p.parent == store.period_dir(5) for p in paths)
        assert store.all_present(paths)

    def test_rewrite_replaces_previous_artifacts(self, tmp_path: Path) -> None:
        store = FileArtifactStore(tmp_path)
        store.write_payloads(0, [b"old-1", b"old-2"])

        paths = store.write_payloads(0, [b"new-1", b"new-2"])

        assert paths[0].read_bytes() == b"new-1"

    def test_all_present_detects_missing_and_empty(self, tmp_path: Path) -> None:
        store = FileArtifactStore(tmp_path)
        paths = store.write_payloads(0, [b"a", b"b"])

        paths[1].write_bytes(b"")
        assert not store.all_present(paths)

        paths[1].unlink()
        assert not store.all_present(paths)

    def test_unwritable_directory_raises(self, tmp_path: Path) -> None:
        blocker = tmp_path / "attestations"
        blocker.write_text("not a directory")
        store = FileArtifactStore(tmp_path)

        with pytest.raises(ArtifactMissingError):
            store.write_payloads(0, [b"a"])

    def test_uncreatable_work_dir_raises(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        store = FileArtifactStore(blocker / "work")

        with pytest.raises(ArtifactMissingError) as exc_info:
            store.ensure_directories()

        assert exc_info.value.path == store.work_dir
