"""Test setup for book2tei."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


LEGACY_HTML = """
<html>
  <body>
    <p><a name="pref1"></a>This is the <i>first</i> preface paragraph.</p>
    <p><a name="pref2"></a>Second preface paragraph.</p>
    <p><a name="intro1"></a>Intro one.</p>
    <p><a name="intro2"></a>Intro two.</p>
    <p><a name="intro2b"></a>Intro two b.</p>
    <p><a name="intro3"></a>Intro three.</p>
    <p><a name="par1"></a>1. In the first paragraph.</p>
    <p><a name="par2"></a>2 Second paragraph.</p>
    <p><a name="q1"></a>1. Question one. Answer one.</p>
    <p><a name="note1"></a>Note one text.</p>
  </body>
</html>
"""

NAVIGATION_HTML = """
<html>
  <body>
    <nav class="gc">
      <ul>
        <li><a href="#h1">Preface</a></li>
        <li><a href="#h2">The Kitáb-i-Aqdas</a></li>
        <li><a href="#h3">Questions and Answers</a></li>
        <li><a href="#h4">Notes</a></li>
        <li><a href="#h5">Index</a></li>
      </ul>
    </nav>
    <div class="ic"><h2><a id="h1"></a>Preface</h2></div>
    <div><p>The preface text.</p></div>
    <div><p>ok</p><p>More preface text.</p></div>
    <div class="ic"><h2><a id="h2"></a>The Kitáb-i-Aqdas</h2></div>
    <div><p>In the Name of Him Who is the Supreme Ruler</p></div>
    <div><p>1 Praise be to God.</p><p>2 Say: O people.</p></div>
    <div class="ic"><h2><a id="h3"></a>Questions and Answers</h2></div>
    <div>
      <p>Question: What is fasting?</p>
      <p>Answer: Abstention from food.</p>
      <p>7</p>
      <p>Question: Second question?</p>
      <p>Answer: Second answer.</p>
    </div>
    <div class="ic"><h2><a id="h4"></a>Notes</h2></div>
    <div class="dd"><p><span class="jb">1. Most Great Name</span> The Greatest Name.</p><p>Second para.</p></div>
    <div class="dd"><p><span class="jb">2. Ancient Beauty</span> A title.</p></div>
    <div class="ic"><h2><a id="h5"></a>Index</h2></div>
    <div><p>Index text</p></div>
  </body>
</html>
"""


@pytest.fixture
def legacy_html() -> str:
    """Document using legacy explicit markers."""
    return LEGACY_HTML


@pytest.fixture
def navigation_html() -> str:
    """Document structured by a navigation block."""
    return NAVIGATION_HTML
