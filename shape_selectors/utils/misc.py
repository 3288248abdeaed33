import importlib.util
from pathlib import Path


def load_module(script_path, module_name="module"):
    spec = importlib.util.spec_from_file_location(module_name, str(Path(script_path)))
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module
