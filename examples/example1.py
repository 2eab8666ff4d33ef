import os
import tempfile

from config_tree import ConfigFormat, ImmutableConfigurationError, Settings
from config_tree.exceptions import ConfigValidationError

if __name__ == "__main__":
    cfg = Settings.from_environment(["home", "user"], environ=os.environ)
    cfg.add_validator("retries", lambda v: isinstance(v, int) and v >= 0)

    try:
        cfg.set("retries", -1)
    except ConfigValidationError as exc:
        print("Validation errors:", exc.errors)

    cfg.set("retries", 3)
    cfg.set("service.endpoints.primary", "https://example.org")

    with tempfile.TemporaryDirectory() as tmp:
        for fmt in (ConfigFormat.STRUCTURED, ConfigFormat.JSON):
            path = os.path.join(tmp, f"settings.{fmt.value}")
            cfg.save_to_file(path, fmt)
            frozen = Settings.load_from_file(path, fmt, immutable=True)
            print(fmt.value, "->", dict(frozen.all()))
            try:
                frozen.set("retries", 5)
            except ImmutableConfigurationError:
                print("Write blocked on immutable settings")
