# -*- coding: utf-8 -*-

from setuptools import setup
setup(
        name="qualoss", 
        version='0.2.0',
        author='Sangjin Lee',
        author_email='sl17@sanger.ac.uk',
        license='MIT',
        classifiers=[
            'Programming Language :: Python :: 3.9',
            'Programming Language :: Python :: 3.10',
            'Programming Language :: Python :: 3.11',
            'Programming Language :: Python :: 3.12'
        ],
        python_requires='>=3.9',
        entry_points={"console_scripts": ["qualoss = qualoss.__main__:main"]},
        packages=['qualoss'],
        package_dir={"": "src"},
        install_requires=[
            'numpy>=1.20.2', 'psutil>=5.8.0', 'pyfastx>=0.8.4'
        ],
        extras_require={
            "test": ['pytest>=7.0.0'],
        },
)
