"""
Dependency Controller for Exe Icon Extractor
Handles checking and installing required dependencies
"""

import sys
import logging
import subprocess

# pip package name -> modules it must provide
REQUIRED_PACKAGES = {
    'pillow': ['PIL'],
}

# Only needed where icons are actually pulled out of executables
WINDOWS_PACKAGES = {
    'pywin32': ['win32gui', 'win32ui', 'win32con'],
}


def get_required_packages(platform=None):
    """Return the packages needed on the given platform."""
    packages = dict(REQUIRED_PACKAGES)
    if (platform or sys.platform) == 'win32':
        packages.update(WINDOWS_PACKAGES)
    return packages


def check_package(import_name):
    try:
        __import__(import_name)
        return True
    except ImportError:
        return False


def install_package(package_name):
    logging.info(f"  > Installing {package_name}...")
    try:
        subprocess.check_call([sys.executable, "-m", "pip", "install", "--upgrade", package_name],
                              stdout=subprocess.PIPE,
                              stderr=subprocess.PIPE)
        return True
    except (subprocess.CalledProcessError, OSError) as e:
        logging.error(f"  > Pip install failed for {package_name}: {e}")
        return False


def find_missing_packages(packages, checker=check_package):
    """Return the pip names whose modules cannot all be imported."""
    return [pip_name for pip_name, import_names in packages.items()
            if not all(checker(name) for name in import_names)]


def check_and_install_dependencies(config, installer=install_package, checker=check_package):
    """Check and install required packages."""
    if config.get("SKIP_DEPENDENCIES", False):
        logging.debug("Skipping dependency checks as SKIP_DEPENDENCIES is True")
        return True

    missing_packages = find_missing_packages(get_required_packages(), checker)
    if not missing_packages:
        logging.debug("All dependencies present")
        return True

    logging.info(f"Missing packages: {', '.join(missing_packages)}")
    for pip_name in missing_packages:
        if not installer(pip_name):
            logging.error(f"  [!] {pip_name} is required, install it manually using:")
            logging.error(f"      pip install {pip_name}")
            return False
        logging.info(f"  [+] Successfully installed {pip_name}")

    return True
