# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import subprocess

import pytest

from stackprobe.credentials import ApiKey, read_secret_reference, resolve_api_key
from stackprobe.errors import ConfigurationError, MissingDependencyError, SecretResolutionError

REF = "op://Dev/Portainer/api-key"


class FakeOp:
    def __init__(self, stdout="ptr_secret\n", returncode=0):
        self.stdout = stdout
        self.returncode = returncode
        self.calls = []

    def __call__(self, args, **kwargs):
        self.calls.append((args, kwargs))
        return subprocess.CompletedProcess(args, self.returncode, stdout=self.stdout, stderr="vault says no")


def _which_found(name):
    return f"/usr/local/bin/{name}"


def _which_missing(_name):
    return None


def test_direct_key_wins_and_skips_secret_command():
    run = FakeOp()
    key = resolve_api_key({"PORTAINER_API_KEY": "ptr_direct", "OP_PORTAINER_API_KEY_REF": REF}, run=run)
    assert key.value == "ptr_direct"
    assert key.source == "env"
    assert run.calls == []


def test_secret_reference_is_resolved_with_op_read():
    run = FakeOp()
    key = resolve_api_key({"OP_PORTAINER_API_KEY_REF": REF}, which=_which_found, run=run)
    assert key.value == "ptr_secret"
    assert key.source == "secret-ref"
    args, kwargs = run.calls[0]
    assert args == ["op", "read", REF]
    assert kwargs["capture_output"] is True


def test_missing_both_inputs_is_a_configuration_error():
    run = FakeOp()
    with pytest.raises(ConfigurationError) as excinfo:
        resolve_api_key({}, which=_which_found, run=run)
    assert excinfo.value.exit_code == 2
    assert run.calls == []


def test_missing_op_command():
    with pytest.raises(MissingDependencyError) as excinfo:
        resolve_api_key({"OP_PORTAINER_API_KEY_REF": REF}, which=_which_missing, run=FakeOp())
    assert excinfo.value.exit_code == 2


def test_failed_op_read_does_not_leak_output():
    run = FakeOp(stdout="half-secret", returncode=1)
    with pytest.raises(SecretResolutionError) as excinfo:
        read_secret_reference(REF, which=_which_found, run=run)
    message = str(excinfo.value)
    assert REF in message
    assert "half-secret" not in message
    assert "vault says no" not in message


def test_empty_op_output_is_rejected():
    with pytest.raises(SecretResolutionError):
        read_secret_reference(REF, which=_which_found, run=FakeOp(stdout="\n"))


def test_api_key_repr_and_str_hide_value():
    key = ApiKey(value="ptr_top_secret")
    assert "ptr_top_secret" not in repr(key)
    assert "ptr_top_secret" not in str(key)


@pytest.mark.parametrize(
    "env",
    [
        {"PORTAINER_API_KEY": "clé_secrète"},
        {"OP_PORTAINER_API_KEY_REF": REF},
    ],
)
def test_non_ascii_key_is_rejected_without_echoing_it(env):
    run = FakeOp(stdout="clé_secrète\n")
    with pytest.raises(ConfigurationError) as excinfo:
        resolve_api_key(env, which=_which_found, run=run)
    assert excinfo.value.exit_code == 2
    assert "clé" not in str(excinfo.value)
