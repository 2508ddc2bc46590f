from setuptools import setup

setup(
    name='ndshape',
    version='0.1.0',
    description='Fast linearization of 2D, 3D and 4D integer coordinates',
    author='Philip Thomsen',
    license='MIT',
    packages=['ndshape'],
    python_requires='>=3.10',
    extras_require={'testing': ['numpy']},
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
)
