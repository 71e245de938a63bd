from setuptools import setup, find_packages

setup(
    name='ReefCheckTidy',
    version='0.1',
    packages=find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.9',
    install_requires=[
        'pandas<3',
        'numpy',
        'python-dotenv'
    ],
    extras_require={
        'test': ['pytest']
    },
    entry_points={
        'console_scripts': [
            'reef-tidy=reef_pipeline.pipeline_controller:main'
        ]
    }
)
