"""Configuration file loading and management"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import yaml

from overlayremote.common.types import ButtonLayout, RemoteAction, ToleranceWindow

DEFAULT_TOLERANCE_PX: float = 30.0
DEFAULT_START_DELAY_SEC: float = 10.0
DEFAULT_VOLUME_STEP_PERCENT: int = 5


@dataclass
class ButtonEntryConfig:
    """A single button entry as written in config.yml"""
    name: str
    x: float
    y: float
    action: RemoteAction


@dataclass
class LayoutConfig:
    """Button layout and hit-test tolerance"""
    tolerance_px: float
    buttons: List[ButtonEntryConfig]

    def buttonLayout_build(self) -> ButtonLayout:
        """
        Build the immutable core layout, preserving configured order

        Returns:
            ButtonLayout

        Raises:
            ValueError: On duplicate button names
        """
        return ButtonLayout.fromTriples_build(
            (entry.name, entry.x, entry.y, entry.action) for entry in self.buttons
        )

    def toleranceWindow_build(self) -> ToleranceWindow:
        """Build the tolerance window from tolerance_px"""
        return ToleranceWindow(radius=float(self.tolerance_px))


@dataclass
class InputConfig:
    """Input device capture settings"""
    devices: Optional[List[str]] = None
    screen_width: int = 1920
    screen_height: int = 1080
    grab: bool = False


@dataclass
class OutputConfig:
    """Media and volume sink settings"""
    backend: str = "uinput"
    volume_method: str = "keys"
    volume_step_percent: int = DEFAULT_VOLUME_STEP_PERCENT
    show_volume_ui: bool = True


@dataclass
class StartupConfig:
    """Deferred start settings"""
    delay_seconds: float = DEFAULT_START_DELAY_SEC


@dataclass
class LoggingConfig:
    """Logging configuration settings"""
    level: str
    file: Optional[str]
    format: str


@dataclass
class Config:
    """Complete application configuration"""
    layout: LayoutConfig
    logging: LoggingConfig
    input: InputConfig = field(default_factory=InputConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    startup: StartupConfig = field(default_factory=StartupConfig)


class ConfigLoader:
    """Loads and parses configuration from YAML files"""

    DEFAULT_CONFIG_PATHS = [
        "config.yml",
        "~/.config/overlayremote/config.yml",
        "/etc/overlayremote/config.yml",
    ]

    SUPPORTED_BACKENDS = ("uinput", "dryrun")
    SUPPORTED_VOLUME_METHODS = ("keys", "pactl")

    @staticmethod
    def configFile_find() -> Optional[Path]:
        """
        Find configuration file in standard locations

        Returns:
            Path to config file, or None if not found
        """
        for config_path in ConfigLoader.DEFAULT_CONFIG_PATHS:
            path = Path(config_path).expanduser().resolve()
            if path.exists() and path.is_file():
                return path
        return None

    @staticmethod
    def yaml_load(file_path: Path) -> Dict[str, Any]:
        """
        Load YAML configuration file

        Args:
            file_path: Path to YAML file

        Returns:
            Parsed configuration dictionary

        Raises:
            FileNotFoundError: If file does not exist
            yaml.YAMLError: If file is not valid YAML
        """
        with open(file_path, "r") as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Config file {file_path} must contain a YAML dictionary")

        return data

    @staticmethod
    def section_get(data: Dict[str, Any], key: str, required: bool = False) -> Dict[str, Any]:
        """
        Return a top-level config section as a mapping

        Args:
            data: Raw configuration dictionary
            key: Section name
            required: Raise KeyError when the section is absent

        Returns:
            Section mapping ({} for an absent or empty optional section)

        Raises:
            KeyError: If a required section is missing
            ValueError: If the section is not a mapping
        """
        section = data[key] if required else data.get(key)
        if section is None and not required:
            return {}
        if not isinstance(section, dict):
            raise ValueError(f"Config section '{key}' must be a mapping, got {section!r}")
        return section

    @staticmethod
    def value_coerce(value: Any, key: str, cast: Callable[[Any], Any]) -> Any:
        """
        Convert a scalar config value, reporting the key on failure

        Raises:
            ValueError: If the value cannot be converted
        """
        try:
            return cast(value)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid value for {key}: {value!r}") from e

    @staticmethod
    def buttons_parse(raw_buttons: Any) -> List[ButtonEntryConfig]:
        """
        Parse the ordered button list

        Args:
            raw_buttons: List of {name, x, y, action} mappings

        Returns:
            Button entries in file order

        Raises:
            KeyError: If an entry is missing a required key
            ValueError: If the list is empty or an action is unknown
        """
        if not isinstance(raw_buttons, list) or not raw_buttons:
            raise ValueError("layout.buttons must be a non-empty list")

        entries: List[ButtonEntryConfig] = []
        for raw in raw_buttons:
            if not isinstance(raw, dict):
                raise ValueError(f"Invalid button entry: {raw!r}")
            name = str(raw["name"])
            entries.append(
                ButtonEntryConfig(
                    name=name,
                    x=ConfigLoader.value_coerce(raw["x"], f"layout.buttons[{name}].x", float),
                    y=ConfigLoader.value_coerce(raw["y"], f"layout.buttons[{name}].y", float),
                    action=RemoteAction.fromName_parse(raw["action"]),
                )
            )
        return entries

    @staticmethod
    def config_parse(data: Dict[str, Any]) -> Config:
        """
        Parse configuration dictionary into Config object

        Args:
            data: Raw configuration dictionary

        Returns:
            Parsed Config object

        Raises:
            KeyError: If required configuration keys are missing
            ValueError: If a value is out of range or unsupported
        """
        coerce = ConfigLoader.value_coerce

        # Parse layout config
        layout_data = ConfigLoader.section_get(data, "layout", required=True)
        layout = LayoutConfig(
            tolerance_px=coerce(
                layout_data.get("tolerance_px", DEFAULT_TOLERANCE_PX), "layout.tolerance_px", float
            ),
            buttons=ConfigLoader.buttons_parse(layout_data["buttons"]),
        )
        # Validate early so a bad file fails at load time
        layout.buttonLayout_build()
        layout.toleranceWindow_build()

        # Parse input config
        input_data = ConfigLoader.section_get(data, "input")
        devices = input_data.get("devices")
        if devices is not None and not isinstance(devices, list):
            raise ValueError(f"input.devices must be a list of paths, got {devices!r}")
        input_config = InputConfig(
            devices=[str(d) for d in devices] if devices else None,
            screen_width=coerce(input_data.get("screen_width", 1920), "input.screen_width", int),
            screen_height=coerce(input_data.get("screen_height", 1080), "input.screen_height", int),
            grab=bool(input_data.get("grab", False)),
        )

        # Parse output config
        output_data = ConfigLoader.section_get(data, "output")
        output = OutputConfig(
            backend=str(output_data.get("backend", "uinput")).lower(),
            volume_method=str(output_data.get("volume_method", "keys")).lower(),
            volume_step_percent=coerce(
                output_data.get("volume_step_percent", DEFAULT_VOLUME_STEP_PERCENT),
                "output.volume_step_percent",
                int,
            ),
            show_volume_ui=bool(output_data.get("show_volume_ui", True)),
        )
        if output.backend not in ConfigLoader.SUPPORTED_BACKENDS:
            raise ValueError(
                f"Unsupported output backend '{output.backend}'. "
                f"Supported: {', '.join(ConfigLoader.SUPPORTED_BACKENDS)}."
            )
        if output.volume_method not in ConfigLoader.SUPPORTED_VOLUME_METHODS:
            raise ValueError(
                f"Unsupported volume method '{output.volume_method}'. "
                f"Supported: {', '.join(ConfigLoader.SUPPORTED_VOLUME_METHODS)}."
            )

        # Parse startup config
        startup_data = ConfigLoader.section_get(data, "startup")
        startup = StartupConfig(
            delay_seconds=coerce(
                startup_data.get("delay_seconds", DEFAULT_START_DELAY_SEC),
                "startup.delay_seconds",
                float,
            ),
        )

        # Parse logging config
        logging_data = ConfigLoader.section_get(data, "logging", required=True)
        logging = LoggingConfig(
            level=logging_data["level"],
            file=logging_data.get("file"),
            format=logging_data["format"],
        )

        return Config(
            layout=layout,
            logging=logging,
            input=input_config,
            output=output,
            startup=startup,
        )

    @staticmethod
    def config_load(file_path: Optional[Path] = None) -> Config:
        """
        Load configuration from file

        Args:
            file_path: Optional path to config file. If None, searches standard locations.

        Returns:
            Parsed Config object

        Raises:
            FileNotFoundError: If config file not found
            ValueError: If config file is invalid
        """
        if file_path is None:
            file_path = ConfigLoader.configFile_find()
            if file_path is None:
                raise FileNotFoundError(
                    f"Config file not found in standard locations: "
                    f"{ConfigLoader.DEFAULT_CONFIG_PATHS}"
                )

        data = ConfigLoader.yaml_load(file_path)
        return ConfigLoader.config_parse(data)

    @staticmethod
    def configWithOverrides_load(
        file_path: Optional[Path] = None,
        **overrides: Any
    ) -> Config:
        """
        Load configuration and apply command-line overrides

        Args:
            file_path: Optional path to config file
            **overrides: Key-value pairs to override config values

        Returns:
            Config object with overrides applied

        Example:
            config = ConfigLoader.configWithOverrides_load(
                tolerance_px=40,
                backend="dryrun"
            )
        """
        config = ConfigLoader.config_load(file_path)

        if overrides.get("tolerance_px") is not None:
            config.layout.tolerance_px = float(overrides["tolerance_px"])
            config.layout.toleranceWindow_build()
        if overrides.get("devices"):
            config.input.devices = list(overrides["devices"])
        if overrides.get("grab"):
            config.input.grab = True
        if overrides.get("backend") is not None:
            backend = str(overrides["backend"]).lower()
            if backend not in ConfigLoader.SUPPORTED_BACKENDS:
                raise ValueError(f"Unsupported output backend '{backend}'")
            config.output.backend = backend
        if overrides.get("volume_method") is not None:
            method = str(overrides["volume_method"]).lower()
            if method not in ConfigLoader.SUPPORTED_VOLUME_METHODS:
                raise ValueError(f"Unsupported volume method '{method}'")
            config.output.volume_method = method
        if overrides.get("start_delay") is not None:
            config.startup.delay_seconds = float(overrides["start_delay"])

        return config
