"""
Directory setup for the harmonization pipeline.

Layout under the base directory:
- outputs/: combined dataset, site summary, prevalence table
- logs/: pipeline log file
- runtime_config_<run_id>.json files sit in the base directory itself
"""

from pathlib import Path


def setup_output_directories(base_output_dir):
    """
    Set up organized output directory structure.

    Parameters
    ----------
    base_output_dir : str or Path
        Base output directory. Created if missing.

    Returns
    -------
    dict
        Dictionary with paths: 'base', 'outputs', 'logs'
    """
    base_output_dir = Path(base_output_dir).expanduser().resolve()

    directories = {
        "base": base_output_dir,
        "outputs": base_output_dir / "outputs",
        "logs": base_output_dir / "logs",
    }

    for path in directories.values():
        path.mkdir(parents=True, exist_ok=True)

    return directories


def get_output_path(output_dirs, filename):
    """Return the path of an output artifact under outputs/."""
    return Path(output_dirs["outputs"]) / filename
