"""
Lithophane job worker.

Watches ``.jobs/`` in the working directory for JSON job files:

    {
        "orderId": "1234",
        "imagePath": "photo.jpg",
        "outDir": "out/1234",
        "params": {"generator": "cylinder", "scale": 2.0, "width": 120,
                   "filter": "lanczos3", "radius": 30.0, "length": 60.0}
    }

Each job writes ``<outDir>/<image stem>.stl`` plus ``<outDir>/lightness.png``.
"""
import json
import logging
import os
import time
from pathlib import Path

from .config import LithophaneConfig
from .generators import source_lightness
from .image import load_image, save_lightness_preview
from .logging_config import setup_logging
from .pipeline import make_mesh
from .report import inspect_mesh
from .stl import write_stl

logger = logging.getLogger(__name__)

POLL_SECONDS = 2


def process(job_path) -> Path:
    with open(job_path, 'r') as f:
        job = json.load(f)
    outdir = Path(job['outDir'])
    outdir.mkdir(parents=True, exist_ok=True)

    config = LithophaneConfig.from_params(job.get('params', {}))
    image_path = Path(job['imagePath'])
    # the preview shows exactly the map the mesh is built from
    lightness = source_lightness(config, load_image(image_path))
    save_lightness_preview(lightness, outdir / 'lightness.png')

    mesh = make_mesh(lightness, config)
    logger.info("mesh check: %s", inspect_mesh(mesh).summary())
    stl_path = write_stl(mesh, outdir / f"{image_path.stem}.stl")

    logger.info("Job done: %s", job.get('orderId', Path(job_path).stem))
    return stl_path


def main():
    setup_logging()
    jobs_dir = os.path.join(os.getcwd(), '.jobs')
    os.makedirs(jobs_dir, exist_ok=True)
    logger.info("Worker watching %s", jobs_dir)
    while True:
        for name in sorted(os.listdir(jobs_dir)):
            if not name.endswith('.json'):
                continue
            path = os.path.join(jobs_dir, name)
            try:
                process(path)
            except Exception:
                logger.exception("Job %s failed", name)
            os.remove(path)
        time.sleep(POLL_SECONDS)


if __name__ == "__main__":
    main()
