import json
from pathlib import Path

from PIL import Image

from raster2grbl import job_log
from raster2grbl.profile import LaserProfile


def test_save_job_record(tmp_path):
    img_path = tmp_path / "test.png"
    Image.new("L", (10, 10), 255).save(img_path)

    result = {"ok": True, "message": "done", "width": 10, "height": 10}
    cfg_file, img_file = job_log.save_job_record(
        str(tmp_path / "records"), str(img_path), LaserProfile(power_max=500), result
    )

    assert Path(cfg_file).exists()
    assert Path(img_file).exists()

    with open(cfg_file, "r") as f:
        record = json.load(f)

    assert record["profile"]["power_max"] == 500
    assert record["result"]["width"] == 10
    assert "message" not in record["result"]
    assert record["source"] == str(img_path)


def test_save_job_record_without_image(tmp_path):
    cfg_file, img_file = job_log.save_job_record(
        str(tmp_path), None, LaserProfile(), {"ok": False}
    )
    assert Path(cfg_file).exists()
    assert img_file is None
