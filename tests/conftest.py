"""Shared test fixtures — sample mail bodies, mail files."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

NBSP = "\u00a0"


def body(*lines: str) -> str:
    """Join *lines* into a mail body ending with a newline."""
    return "\n".join(lines) + "\n"


@pytest.fixture
def ascii_patch_body() -> str:
    """A git format-patch body with one ascii hunk and a signature."""
    return body(
        "Signed-off-by: Dev <dev@example.com>",
        "---",
        " foo.c | 2 +-",
        " 1 file changed, 1 insertion(+), 1 deletion(-)",
        "",
        "diff --git a/foo.c b/foo.c",
        "index 1111111..2222222 100644",
        "--- a/foo.c",
        "+++ b/foo.c",
        "@@ -1,3 +1,3 @@",
        " int a;",
        "-int b;",
        "+int c;",
        " int d;",
        "-- ",
        "2.40.0",
    )


@pytest.fixture
def shell_patch_body() -> str:
    """An ascii hunk against a shell script."""
    return body(
        "diff --git a/build.sh b/build.sh",
        "--- a/build.sh",
        "+++ b/build.sh",
        "@@ -1,2 +1,2 @@",
        " #!/bin/sh",
        "-make",
        "+make -j4",
        "-- ",
    )


@pytest.fixture
def binary_patch_body() -> str:
    """A git binary patch with a literal and a reverse literal."""
    return body(
        "diff --git a/logo.bmp b/logo.bmp",
        "new file mode 100644",
        "index 0000000000000000000000000000000000000000..a1b2c3d4e5f60718293a4b5c6d7e8f9012345678",
        "GIT binary patch",
        "literal 128",
        "zcmZQzU}RumU|?Wk00IUE1_l8J1_lOBApZVe",
        "zcmeIu0Sy2E0K%a6Pi+o2h(KY$fB^#r3>YwAz<>b*1`HT5V8DO@0|pEjFkrxd",
        "",
        "literal 0",
        "HcmV?d00001",
        "",
        "-- ",
    )


@pytest.fixture
def outlook_body() -> str:
    """An ascii patch as Outlook delivers it: NBSPs, CRLF and an injected blank line."""
    return (
        "diff --git a/Readme.md b/Readme.md\r\n"
        "--- a/Readme.md\r\n"
        "+++ b/Readme.md\r\n"
        "@@ -1,2 +1,4 @@\r\n"
        f"{NBSP}# Title\r\n"
        "+\r\n"
        "\r\n"
        f"+{NBSP}{NBSP}indented\r\n"
        f"{NBSP}tail\r\n"
        "\r\n"
        "-- \r\n"
        "Sent from Outlook\r\n"
    )


@pytest.fixture
def plain_mail_body() -> str:
    """An ordinary mail that is not a patch."""
    return textwrap.dedent("""\
        Hi all,

        Could someone review the series I sent yesterday?

        Thanks
    """)


@pytest.fixture
def eml_file(tmp_path: Path) -> Path:
    """A quoted-printable .eml holding a patch with NBSPs and a folded subject."""
    raw = (
        "From: Dev <dev@example.com>\n"
        "To: devel@lists.example.org\n"
        "Subject: [edk2-devel] [PATCH V2 2/5] Add FooLib\n"
        " support.\n"
        "MIME-Version: 1.0\n"
        'Content-Type: text/plain; charset="utf-8"\n'
        "Content-Transfer-Encoding: quoted-printable\n"
        "\n"
        "diff --git a/foo.c b/foo.c\n"
        "--- a/foo.c\n"
        "+++ b/foo.c\n"
        "@@ -1 +1,2 @@\n"
        "=C2=A0int a;\n"
        "+int b;\n"
        "--=20\n"
        "2.40.0\n"
    )
    path = tmp_path / "0002.eml"
    path.write_bytes(raw.encode("ascii"))
    return path


@pytest.fixture
def mbox_file(tmp_path: Path) -> Path:
    """An mbox with one patch mail and one ordinary mail."""
    raw = (
        "From dev@example.com Mon Jan  1 00:00:00 2024\n"
        "From: Dev <dev@example.com>\n"
        "Subject: [PATCH 1/2] First change\n"
        "\n"
        "diff --git a/a.txt b/a.txt\n"
        "@@ -1 +1 @@\n"
        "-old\n"
        "+new\n"
        "-- \n"
        "\n"
        "From dev@example.com Mon Jan  1 00:01:00 2024\n"
        "From: Dev <dev@example.com>\n"
        "Subject: Re: [PATCH 1/2] First change\n"
        "\n"
        "Looks good to me.\n"
    )
    path = tmp_path / "series.mbox"
    path.write_bytes(raw.encode("ascii"))
    return path
