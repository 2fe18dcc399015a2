import json

from config.settings import LoggingConfig, StorageConfig
from src.loaders.file_loader import FileLoader
from src.transformers.ring_transformer import placeholder_rings, RingCard


async def test_save_rings_creates_parent_dirs(tmp_path):
    output_path = tmp_path / "nested" / "assets" / "data" / "rings.json"
    loader = FileLoader(StorageConfig(output_path=output_path), LoggingConfig(log_dir=tmp_path))

    written = await loader.save_rings(placeholder_rings())

    assert written == output_path
    data = json.loads(output_path.read_text(encoding="utf-8"))
    assert data[0] == {
        "id": "classic-solitaire",
        "name": "Classic Solitaire",
        "tagline": "Clean lines, timeless profile",
        "href": "",
        "badge": "Configurable",
        "model": 1,
    }


async def test_stats_log_disabled_by_default(tmp_path):
    loader = FileLoader(
        StorageConfig(output_path=tmp_path / "rings.json"),
        LoggingConfig(log_dir=tmp_path / "logs"),
    )

    assert await loader.append_run_stats({"rings_written": 1}) is None
    assert not (tmp_path / "logs").exists()


async def test_stats_log_appends_lines(tmp_path):
    logging_config = LoggingConfig(log_dir=tmp_path / "logs", log_to_file=True)
    loader = FileLoader(StorageConfig(output_path=tmp_path / "rings.json"), logging_config)

    await loader.append_run_stats({"rings_written": 1})
    await loader.append_run_stats({"rings_written": 2})

    lines = logging_config.log_path.read_text(encoding="utf-8").splitlines()
    assert [json.loads(line)["rings_written"] for line in lines] == [1, 2]
    assert "logged_at" in json.loads(lines[0])


async def test_save_rings_overwrites(tmp_path):
    output_path = tmp_path / "rings.json"
    output_path.write_text("[]\n", encoding="utf-8")
    loader = FileLoader(StorageConfig(output_path=output_path), LoggingConfig(log_dir=tmp_path))

    await loader.save_rings([RingCard(id="r1", name="Ring")])

    assert [r["id"] for r in json.loads(output_path.read_text(encoding="utf-8"))] == ["r1"]
