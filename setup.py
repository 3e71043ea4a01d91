"""setuptools configuration for the photo album layout engine.

Usage:
    pip install -e .[test]
    pytest
"""
from setuptools import setup

MODULES = [
    'units',
    'models',
    'layout_engine',
    'print_packer',
    'metadata',
    'album',
]

setup(
    name='photo-album-layout',
    version='1.0.0',
    description='Cover-fit album page layout and print sheet packing',
    py_modules=MODULES,
    python_requires='>=3.10',
    install_requires=['Pillow'],
    extras_require={'test': ['pytest']},
)
