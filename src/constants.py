"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    INCOMPATIBLE = 1
    INPUT_ERROR = 2
    EXIT_WARNINGS = 3
    CATALOG_ERROR = 4


class OutputFormats(Enum):
    """Export formats supported by the program.

    Args:
        Enum (string): Export formats supported by the program.
    """

    JSON = "json"
    CSV = "csv"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    PROG_NAME = "compatgate"
    ENV_LOG_LEVEL = "COMPATGATE_LOG_LEVEL"
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
    CONFIG_SECTION = "compatgate"
    SUPPORTED_FORMATS = [OutputFormats.JSON.value, OutputFormats.CSV.value]
    TARGET_LATEST = "latest"
    TARGET_ALL = "all"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for catalog downloads

    # Manifest files searched (in order) when a directory is given
    PLUGIN_XML_FILE = "plugin.xml"
    PLUGIN_XML_RELATIVE = "src/main/resources/META-INF/plugin.xml"
    GRADLE_PROPERTIES_FILE = "gradle.properties"
    GRADLE_KTS_FILE = "build.gradle.kts"
    GRADLE_GROOVY_FILE = "build.gradle"
