import angreal # type: ignore
import os
import subprocess
import sys



cwd = os.path.join(angreal.get_root(),'..')


def run_python(args, env=None):
    """Run a python module from the project root.

    Args:
        args: Arguments passed after `python -m`.
        env: Optional extra environment variables.
    """
    full_env = dict(os.environ)
    if env:
        full_env.update(env)
    result = subprocess.run([sys.executable, "-m", *args], cwd=cwd, env=full_env)
    return result.returncode
