from pathlib import Path
from setuptools import setup

root = Path(__file__).parent
version_text = root.joinpath('src', 'lzs', 'version.py').read_text()
version = version_text.split('VERSION = ', 1)[-1].strip().replace('-', '').replace("'", '')

setup(version=version)
