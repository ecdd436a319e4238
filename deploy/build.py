import shutil
import subprocess
import tomllib
from pathlib import Path


def build():
    build_dir = Path("build")

    # Clean
    if build_dir.exists():
        shutil.rmtree(build_dir)
    build_dir.mkdir()

    # Install deps to build folder
    with open("pyproject.toml", "rb") as f:
        dependencies = tomllib.load(f)["project"]["dependencies"]

    subprocess.run([
        "pip", "install", *dependencies,
        "-t", str(build_dir),
        "--platform", "manylinux2014_x86_64",
        "--only-binary=:all:",
    ], check=True)

    # Copy source
    shutil.copytree("src/pdf_worker", build_dir / "pdf_worker")

    # Zip
    shutil.make_archive("lambda_function", "zip", build_dir)


if __name__ == "__main__":
    build()
