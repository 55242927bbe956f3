"""
End-to-end run for shapesnap.

Loads an image, approximates it with shapes and writes the SVG plus the
optional rendered canvas and JSON summary.
"""

import os

from shapesnap.config import load_config
from shapesnap.io.load_image import load_image
from shapesnap.io.save_artifacts import ensure_dir, save_image, save_json, save_svg
from shapesnap.optimizer import Shapesnap
from shapesnap.tracer import get_tracer, trace


@trace(label="run_snap")
def run_snap(input_path, out_dir, config=None, config_path=None, callback=None):
    """
    Approximate the image at input_path and write the outputs to out_dir.
    
    Args:
        input_path: image file to approximate
        out_dir: output directory
        config: SnapConfig object (optional)
        config_path: path to YAML config file (optional)
        callback: forwarded to Shapesnap.run
    
    Returns:
        SnapResult describing the run
    """
    tracer = get_tracer()
    
    if config is None:
        config = load_config(config_path)
    
    target = load_image(input_path, max_edge=config.output.max_edge)
    snap = Shapesnap(target, config)
    
    with tracer.span("search", module="pipeline", shapes=config.search.amount_of_shapes):
        snap.run(callback=callback)
    
    ensure_dir(out_dir)
    save_svg(snap.to_svg(), os.path.join(out_dir, "output.svg"))
    
    if config.output.write_png:
        save_image(snap.image, os.path.join(out_dir, "output.png"))
    
    result = snap.result()
    
    if config.output.write_json:
        save_json(result, os.path.join(out_dir, "shapes.json"))
    
    tracer.event(
        f"Placed {len(result.shapes)} shapes",
        initial=result.initial_score, final=result.final_score,
    )
    
    return result
