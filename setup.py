#!/usr/bin/env python3

from setuptools import setup
import os

directory = os.path.dirname(os.path.realpath(__file__))


if __name__ == "__main__":
    setup(
        name="uiplatform",
        packages=["uiplatform", "uiplatform.backends"],
        python_requires='>3.10.0',
        version="0.0.0",
        license="MIT",
        description="Platform abstraction and input translation layer for OpenGL desktop applications",
        author="mirmik",
        author_email="mirmikns@yandex.ru",
        long_description=open(os.path.join(
            directory, "README.md"), "r", encoding="utf8").read(),
        long_description_content_type="text/markdown",
        keywords=["gui", "cad", "opengl"],
        classifiers=[],
        include_package_data=True,
        install_requires=[
            "PyOpenGL>=3.1",
            "Pillow>=9.0",
            "PyQt6>=6.4",
        ],
        extras_require={
            "spacemouse": ["pyspacemouse"],
            "test": ["pytest"],
        },
        zip_safe=False,
    )
