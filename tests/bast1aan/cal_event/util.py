import importlib.util
import os
import traceback
import types

def _caller_filename() -> str:
    return traceback.extract_stack()[-3].filename

def get_fixture(name: str) -> types.ModuleType:
    """ Loads <name>.py from the directory named after the calling test module """
    caller_filename = _caller_filename()
    fixture_dir = os.path.splitext(caller_filename)[0]
    path = os.path.join(fixture_dir, name + '.py')
    spec = importlib.util.spec_from_file_location(name, path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module
