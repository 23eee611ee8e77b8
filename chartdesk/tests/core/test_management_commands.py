import json
from unittest.mock import patch

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

MANIFEST = {
    "metadata": {"dbt_version": "1.7.4"},
    "nodes": {
        "model.shop.orders": {"resource_type": "model", "name": "orders"},
        "test.shop.not_null_orders_id": {"resource_type": "test", "name": "not_null_orders_id"},
    },
    "sources": {},
}


@pytest.fixture(autouse=True)
def mock_setup_logger():
    with patch("chartdesk.management.commands.loaddbtmanifest.setup_logger") as mock_setup:
        yield mock_setup


class TestLoadDbtManifestCommand:
    """Test cases for the loaddbtmanifest management command"""

    def test_target_dir(self, tmp_path, capsys):
        target_dir = tmp_path / "target"
        target_dir.mkdir()
        (target_dir / "manifest.json").write_text(json.dumps(MANIFEST))

        call_command("loaddbtmanifest", "--target-dir", str(target_dir))

        output = capsys.readouterr().out
        assert "dbt version: 1.7.4" in output
        assert "model" in output
        assert "  orders" in output

    def test_project_dir_reads_target_path(self, tmp_path, capsys):
        (tmp_path / "dbt_project.yml").write_text("name: shop\ntarget-path: out\n")
        (tmp_path / "out").mkdir()
        (tmp_path / "out" / "manifest.json").write_text(json.dumps(MANIFEST))

        call_command("loaddbtmanifest", "--project-dir", str(tmp_path))

        assert "  orders" in capsys.readouterr().out

    def test_missing_manifest(self, tmp_path):
        with pytest.raises(CommandError) as excinfo:
            call_command("loaddbtmanifest", "--target-dir", str(tmp_path))
        assert "Could not load manifest from" in str(excinfo.value)

    def test_requires_a_directory(self):
        with pytest.raises(CommandError):
            call_command("loaddbtmanifest")
