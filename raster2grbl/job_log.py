"""Job record helpers.

Saves a JSON record of one conversion next to a PNG copy of the source
image, so a burn can be traced back to the settings that produced it.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

from PIL import Image

from .profile import LaserProfile


def save_job_record(
    output_dir: str, image_path: Optional[str], profile: LaserProfile, result: Dict
):
    p = Path(output_dir)
    p.mkdir(parents=True, exist_ok=True)
    ts = datetime.now().strftime("%y%m%d%H%M%S")
    cfg_name = p / f"job-{ts}.json"
    img_name = p / f"job-{ts}.png"

    record = {
        "timestamp": datetime.now().isoformat(),
        "source": str(image_path) if image_path else "",
        "image": str(img_name) if image_path else "",
        "profile": profile.to_dict(),
        "result": {k: v for k, v in result.items() if k != "message"},
    }

    with open(cfg_name, "w") as f:
        json.dump(record, f, indent=2)

    if image_path:
        with Image.open(image_path) as im:
            im.save(img_name)
    else:
        img_name = None

    return str(cfg_name), (str(img_name) if img_name else None)
