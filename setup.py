from setuptools import setup
from setuptools import Command

try:
    import sage.env
    import sage.version
except ImportError:
    raise ValueError("this package requires SageMath")

class TestCommand(Command):
    user_options = []

    def initialize_options(self):
        pass

    def finalize_options(self):
        pass

    def run(self):
        import subprocess
        if subprocess.call(['sage', '-tp', '--force-lib', 'src/']):
            raise SystemExit("Doctest failures")

setup(
    name = "gauss_manin",
    version = "0.1",
    author = "The gauss_manin developers",
    license = "GPL",
    packages = [
        "gauss_manin",
        "gauss_manin.examples",
    ],
    package_dir = {'': 'src/'},
    cmdclass = {'test': TestCommand},
    zip_safe=False,
)
