"""Pytest configuration and shared fixtures for foldeb tests.

This module provides auto-use fixtures that ensure test isolation,
particularly for configuration read from the environment.
"""

import pytest


FOLDEB_ENV_VARS = (
    'FOLDEB_DEPTH_GATE',
    'FOLDEB_DEPTH_THRESHOLD',
    'FOLDEB_LOG_LEVEL',
    'FOLDEB_MAX_WORKERS',
)


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """Auto-use fixture that removes foldeb settings from the environment.

    This ensures a developer's shell configuration (for example an exported
    FOLDEB_DEPTH_GATE) cannot change test outcomes.
    """
    for name in FOLDEB_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def guarded_function_source():
    """A small function with one guarded error branch and one normal return."""
    return 'function f(x) {\n  if (x == null) {\n    return false;\n  }\n  return true;\n}\n'


@pytest.fixture
def c_source():
    """C source with a null check, an error-code check and a cleanup label."""
    return """int open_device(const char *path, struct device **out)
{
    struct device *dev;
    int ret;

    if (path == NULL) {
        return -EINVAL;
    }

    dev = calloc(1, sizeof(*dev));
    if (!dev) {
        return -ENOMEM;
    }

    ret = device_init(dev, path);
    if (ret < 0) {
        fprintf(stderr, "device init failed: %d\\n", ret);
        goto err_free;
    }

    *out = dev;
    return 0;

err_free:
    free(dev);
    return ret;
}
"""
