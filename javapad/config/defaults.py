"""
Default Configuration Values
============================

Default configuration values for javapad.
These are merged with user configuration from main.yaml.
"""

from typing import Any, Dict

# Java (OpenJDK 13.0.1) on Judge0 CE
JUDGE0_JAVA_LANGUAGE_ID = 62

DEFAULTS: Dict[str, Any] = {
    "execution": {
        # Preference order: first entry is tried first.
        "providers": [
            {
                "name": "judge0_rapidapi",
                "kind": "judge0",
                "base_url": "https://judge0-ce.p.rapidapi.com",
                "language_id": JUDGE0_JAVA_LANGUAGE_ID,
            },
            {
                "name": "judge0_ce",
                "kind": "judge0",
                "base_url": "https://ce.judge0.com",
                "language_id": JUDGE0_JAVA_LANGUAGE_ID,
            },
            {
                "name": "piston",
                "kind": "piston",
                "base_url": "https://emkc.org/api/v2/piston",
                "language": "java",
                "version": "*",
                "file_name": "Main.java",
            },
        ],
    },
    "storage": {
        "snippet_store": "memory",
    },
    "logging": {
        "level": "INFO",
        "save_to_file": False,
        "log_dir": "./data/logs",
    },
}
