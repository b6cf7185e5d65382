"""Shared fixtures: a small shared library on disk plus an isolated config."""

import json

import pytest

from libscout.config import ScoutConfig

AVATAR_VUE = """\
<template>
  <div class="yb-avatar" @click="onClick">
    <img :src="src" :alt="alt" />
  </div>
</template>

<script>
import sizeMixin from '../mixins/size';

export default {
  name: 'yb-avatar',
  mixins: [sizeMixin],
  props: {
    src: {
      type: String,
      default: ''
    },
    size: {
      type: Number,
      default: 40
    },
    alt: String
  },
  methods: {
    onClick() {
      this.$emit('click');
      this.$emit('click');
    }
  }
};
</script>
"""

BUTTON_VUE = """\
<template>
  <button @click="$emit('press', $event)"><slot /></button>
</template>

<script>
export default {
  props: ['label', 'disabled']
};
</script>
"""

INPUT_VUE = """\
<template>
  <input :value="value" @input="$emit('input', $event.target.value)" />
</template>

<script>
export default {
  props: {
    value: {
      type: String,
      default: ''
    }
  }
};
</script>
"""

COMPONENTS_README = """\
# Components

Shared UI components.

## yb-avatar

Displays a user avatar. Falls back to initials.

### Props

| Name | Type | Default | Description |
|------|------|---------|-------------|
| src | String | '' | Image URL |
| size | Number | 40 | Pixel size |

### Events

| Name | Type | Description |
|------|------|-------------|
| click | MouseEvent | Fired when the avatar is clicked |

```vue
<yb-avatar src="/me.png"></yb-avatar>
```

## yb-button

A plain button.
"""

CRYPTO_JS = """\
import CryptoJS from 'crypto-js';

export function encrypted(value, key) {
  return CryptoJS.AES.encrypt(value, key).toString();
}

export const decrypted = (value, key) => CryptoJS.AES.decrypt(value, key).toString(CryptoJS.enc.Utf8);

function pad(value) {
  return value;
}
"""

FORMAT_JS = """\
export const formatDate = (date) => date.toISOString();
export default formatDate;
"""

UTILS_README = """\
# Utilities

Helpers shared across apps.

```javascript
import { encrypted } from '@shared/utils';
encrypted('secret', key);
```
"""

API_CONFIG_JS = """\
export const API_BASE = 'https://api.example.com';
const TIMEOUT = 3000;
export const ENDPOINTS = {
  users: '/users',
  items: '/items'
};
"""

TOAST_JS = """\
export default function install(Vue, options) {
  Vue.prototype.$toast = (message) => message;
}
"""

TOAST_README = """\
# Toast

Toast notifications. Register once in main.js.

```javascript
Vue.use(toast, { timeout: 3000 });
```
"""


def _write(path, content):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch):
    """Keep the developer's own libscout settings out of the tests."""
    monkeypatch.delenv("LIBSCOUT_HOME", raising=False)
    monkeypatch.delenv("SHARED_LIBRARY_PATH", raising=False)


@pytest.fixture
def config(tmp_path):
    """Config with temp base path."""
    config = ScoutConfig(base_path=tmp_path / "libscout")
    config.ensure_directories()
    return config


@pytest.fixture
def sample_library(tmp_path):
    """A shared library with two component folders, utils, config, a plugin and examples.

    chart-components is deliberately absent.
    """
    root = tmp_path / "shared"
    scripts = root / "src" / "scripts"

    _write(scripts / "components" / "yb-avatar.vue", AVATAR_VUE)
    _write(scripts / "components" / "yb-button.vue", BUTTON_VUE)
    _write(scripts / "components" / "README.md", COMPONENTS_README)
    _write(scripts / "form-components" / "yb-input.vue", INPUT_VUE)

    _write(scripts / "utils" / "crypto.js", CRYPTO_JS)
    _write(scripts / "utils" / "format.js", FORMAT_JS)
    _write(scripts / "utils" / "index.js", "export * from './crypto';\n")
    _write(scripts / "utils" / "README.md", UTILS_README)

    _write(scripts / "config" / "api.js", API_CONFIG_JS)
    _write(scripts / "config" / "index.js", "export * from './api';\n")

    _write(scripts / "plugins" / "README.md", "# Plugins\n\nAll plugins follow the Vue plugin API.\n")
    _write(scripts / "plugins" / "toast" / "index.js", TOAST_JS)
    _write(scripts / "plugins" / "toast" / "README.md", TOAST_README)

    demo = root / "examples" / "demo-app"
    _write(demo / "package.json", json.dumps({"name": "demo-app", "version": "0.1.0"}))
    _write(demo / "README.md", "# Demo app\n\nShows the avatar and the toast plugin.\n")
    _write(demo / "src" / "main.js", "import Vue from 'vue';\n")
    _write(demo / ".env", "SECRET=1\n")
    _write(root / "examples" / "broken-app" / "main.js", "console.log('hi');\n")

    return root


class RecordingLogger:
    """Logger stand-in that keeps every formatted message."""

    def __init__(self):
        self.records = []

    def _record(self, level, msg, *args):
        self.records.append((level, msg % args if args else msg))

    def debug(self, msg, *args):
        self._record("debug", msg, *args)

    def info(self, msg, *args):
        self._record("info", msg, *args)

    def warning(self, msg, *args):
        self._record("warning", msg, *args)

    def error(self, msg, *args):
        self._record("error", msg, *args)

    def messages(self, level):
        return [message for record_level, message in self.records if record_level == level]


@pytest.fixture
def recording_logger():
    return RecordingLogger()
