# python
import logging

from config_tree import Settings

if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)

    settings = Settings({"app": {"name": "demo"}, "http.timeout": "5"})
    settings.add_validator("app.port", lambda v: isinstance(v, int) and 0 < v < 65536)

    settings.set("app.port", 8080)
    settings.set_scoped("app", "locale", "en")

    print("Name:", settings.get("app.name"))
    print("Scoped locale:", settings.get_scoped("app", "locale"))
    print("Timeout (float):", settings.get_typed("http.timeout", "float"))
    print("Keys:", settings.keys())
