"""Tests for unit-file escaping."""

from podunit.generator.escape import Verbatim, escape_dollar, escape_percent, join_command, quote_argument


def test_escape_percent():
    """Test percent signs are doubled."""
    assert escape_percent("USER=%a") == "USER=%%a"
    assert escape_percent("100%%") == "100%%%%"
    assert escape_percent("plain") == "plain"


def test_quote_plain_argument():
    """Test simple tokens pass unchanged."""
    assert quote_argument("alpine") == "alpine"
    assert quote_argument("--name=foo") == "--name=foo"


def test_quote_whitespace():
    """Test tokens with spaces are double-quoted."""
    assert quote_argument("BAR=my test") == '"BAR=my test"'


def test_quote_escapes_quotes_and_backslashes():
    """Test embedded quotes and backslashes are escaped inside quotes."""
    assert quote_argument('say "hi"') == '"say \\"hi\\""'
    assert quote_argument("a\\b") == '"a\\\\b"'


def test_template_braces_untouched():
    """Test Go template syntax passes through."""
    assert quote_argument("--log-opt=tag={{.Name}}") == "--log-opt=tag={{.Name}}"
    assert quote_argument("key={{someval}}") == "key={{someval}}"


def test_verbatim_not_escaped():
    """Test specifiers emitted on purpose are left alone."""
    assert quote_argument(Verbatim("%t/%n.ctr-id")) == "%t/%n.ctr-id"
    assert quote_argument("%t/%n.ctr-id") == "%%t/%%n.ctr-id"


def test_join_command():
    """Test tokens are escaped and space-joined."""
    tokens = ["/usr/bin/podman", "run", "-e", "BAR=my test", Verbatim("--cidfile=%t/%n.ctr-id")]

    assert join_command(tokens) == '/usr/bin/podman run -e "BAR=my test" --cidfile=%t/%n.ctr-id'


def test_escape_dollar():
    """Test dollar signs are doubled."""
    assert escape_dollar("HOME_COPY=$HOME") == "HOME_COPY=$$HOME"
    assert escape_dollar("${A}$$") == "$${A}$$$$"


def test_join_command_escapes_dollar():
    """Test Exec lines keep variables away from systemd."""
    line = join_command(["podman", "-e", "HOME_COPY=$HOME", "sh", "-c", "echo ${PATH}"])

    assert line == 'podman -e HOME_COPY=$$HOME sh -c "echo $${PATH}"'


def test_quote_argument_keeps_dollar():
    """Test Environment= values are not dollar-escaped."""
    assert quote_argument("HOME_COPY=$HOME") == "HOME_COPY=$HOME"
    assert join_command([Verbatim("$MAINPID")]) == "$MAINPID"
