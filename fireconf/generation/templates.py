"""Built-in template bundle.

Keys are output paths relative to the target directory and are themselves
Jinja2 templates; values are the file templates. Every template renders
with StrictUndefined, so each variable used here must be present in the
generation variables.

Values in the JSON templates are written with the tojson filter.
"""

FIREBASERC_TEMPLATE = """{
  "projects": {
    "default": {{ project_id | tojson }}
  }
}
"""

FIREBASE_JSON_TEMPLATE = """{
  "flutter": {
    "platforms": {
{%- set entries = platforms.split(",") if platforms else [] %}
{%- for platform in entries %}
      {{ platform | tojson }}: {
        "projectId": {{ project_id | tojson }}
{%- if platform == "android" and android_package_name %},
        "packageName": {{ android_package_name | tojson }}
{%- elif platform == "ios" and ios_bundle_id %},
        "bundleId": {{ ios_bundle_id | tojson }}
{%- elif platform == "macos" and macos_bundle_id %},
        "bundleId": {{ macos_bundle_id | tojson }}
{%- endif %}
      }{{ "," if not loop.last else "" }}
{%- endfor %}
    }
  }
}
"""

README_TEMPLATE = """# {{ name }}

{{ description }}

Firebase project: `{{ project_id }}` ({{ project_display_name }})
Organization: `{{ org }}`
Platforms: {{ platforms or "none" }}
"""

BUNDLE: dict[str, str] = {
    ".firebaserc": FIREBASERC_TEMPLATE,
    "firebase.json": FIREBASE_JSON_TEMPLATE,
    "README.md": README_TEMPLATE,
}

# Variables every template in BUNDLE needs
REQUIRED_VARIABLES: tuple[str, ...] = (
    "name",
    "org",
    "description",
    "project_id",
    "project_display_name",
    "platforms",
    "android_package_name",
    "ios_bundle_id",
    "macos_bundle_id",
)

__all__ = [
    "BUNDLE",
    "REQUIRED_VARIABLES",
]
