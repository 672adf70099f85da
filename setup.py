from setuptools import setup

setup(
    name='blockcrypt',
    version='0.1.0',
    description="AES-CBC encryption with cached per-key cipher contexts.",
    author='SiumLhahah',
    author_email='siumlhahah@outlook.com',
    packages=[
        'blockcrypt',
        'blockcrypt.lib',
        'blockcrypt.utils',
    ],
    license='MIT',
    python_requires='>=3.11',
    install_requires=[
         'cryptography',
         'python-dotenv',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
)
