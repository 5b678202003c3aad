from setuptools import setup

setup(
    name='optimus-ids',
    version='1.0',
    description='Reversible integer ID obfuscation using prime multiplication and an XOR mask.',
    python_requires='>=3.11',
    py_modules=['config', 'core_logic', 'models', 'mymath', 'obfuscation'],
    install_requires=[
        'pydantic>=2.0',
        'pydantic-settings>=2.0',
    ],
    extras_require={
        'test': ['pytest'],
    },
)
