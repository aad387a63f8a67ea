"""Shared test fixtures for yfantasy.

Provides fakes for the pieces at the edges of the request pipeline
(transport, response, content provider), sample ``fantasy_content``
documents, an isolated config environment, and output management.
These fixtures are automatically discovered by pytest and available to
all test modules without explicit imports.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import pytest

from yfantasy.models import FantasyContent
from yfantasy.output import OutputFormat, OutputManager, reset_output, set_output
from yfantasy.provider import ContentProvider


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches Rich consoles bound to the streams that were
    active when it was created; resetting forces a fresh manager on next
    use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakeResponse:
    """Response whose body is *body*, or whose read fails with *read_error*."""

    def __init__(self, body: bytes = b"", read_error: Optional[Exception] = None) -> None:
        self.body = body
        self.read_error = read_error
        self.closed = False

    def read(self) -> bytes:
        if self.read_error is not None:
            raise self.read_error
        return self.body

    def close(self) -> None:
        self.closed = True


class ScriptedTransport:
    """Fails with *error* for the first *error_count* calls, then returns *response*."""

    def __init__(
        self,
        response: Optional[FakeResponse] = None,
        error: Optional[Exception] = None,
        error_count: int = 0,
    ) -> None:
        self.response = response if response is not None else FakeResponse()
        self.error = error
        self.error_count = error_count
        self.calls = 0
        self.urls: list[str] = []

    def get(self, url: str) -> FakeResponse:
        self.urls.append(url)
        self.calls += 1
        if self.error is not None and self.calls <= self.error_count:
            raise self.error
        return self.response


class StubProvider(ContentProvider):
    """Returns *content* (or raises *error*) and counts every call."""

    def __init__(
        self,
        content: Optional[FantasyContent] = None,
        error: Optional[Exception] = None,
    ) -> None:
        self.content = content if content is not None else FantasyContent()
        self.error = error
        self.count = 0
        self.urls: list[str] = []

    def get(self, url: str) -> FantasyContent:
        self.urls.append(url)
        self.count += 1
        if self.error is not None:
            raise self.error
        return self.content

    @property
    def request_count(self) -> int:
        return self.count


@pytest.fixture
def make_response():
    """Factory for :class:`FakeResponse`."""
    return FakeResponse


@pytest.fixture
def make_transport():
    """Factory for :class:`ScriptedTransport`."""
    return ScriptedTransport


@pytest.fixture
def make_provider():
    """Factory for :class:`StubProvider`."""
    return StubProvider


# ---------------------------------------------------------------------------
# Sample documents
# ---------------------------------------------------------------------------

_NAMESPACES = (
    'xmlns:yahoo="http://www.yahooapis.com/v1/base.rng" '
    'xmlns="http://fantasysports.yahooapis.com/fantasy/v2/base.rng" '
    'xml:lang="en-US"'
)

TEAM_XML = f"""
<?xml version="1.0" encoding="UTF-8"?>
<fantasy_content {_NAMESPACES} yahoo:uri="http://fantasysports.yahooapis.com/fantasy/v2/team/223.l.431.t.1" time="426.26690864563ms" copyright="Data provided by Yahoo! and STATS, LLC">
  <team>
    <team_key>223.l.431.t.1</team_key>
    <team_id>1</team_id>
    <name>Team Name</name>
    <url>http://football.fantasysports.yahoo.com/archive/pnfl/2009/431/1</url>
    <team_logos>
      <team_logo>
        <size>medium</size>
        <url>http://example.com/logo.png</url>
      </team_logo>
    </team_logos>
    <division_id>2</division_id>
    <faab_balance>22</faab_balance>
    <managers>
      <manager>
        <manager_id>13</manager_id>
        <nickname>Nickname</nickname>
        <guid>1234567890</guid>
      </manager>
    </managers>
    <team_points>
        <coverage_type>week</coverage_type>
        <week>16</week>
        <total>123.450000</total>
    </team_points>
    <team_projected_points>
        <coverage_type>week</coverage_type>
        <week>16</week>
        <total>543.210000</total>
    </team_projected_points>
    <team_standings>
        <rank>5</rank>
        <outcome_totals>
            <wins>9</wins>
            <losses>4</losses>
            <ties>0</ties>
        </outcome_totals>
        <points_for>1500.5</points_for>
        <points_against/>
    </team_standings>
  </team>
</fantasy_content> """.encode()

BLANK_NUMBERS_XML = f"""
<?xml version="1.0" encoding="UTF-8"?>
<fantasy_content {_NAMESPACES}>
  <team>
    <team_key>223.l.431.t.1</team_key>
    <team_id>1</team_id>
    <team_points>
        <coverage_type>week</coverage_type>
        <week>16</week>
        <total/>
    </team_points>
    <team_projected_points>
        <coverage_type>week</coverage_type>
        <week/>
        <total>   </total>
    </team_projected_points>
    <team_standings>
        <rank/>
    </team_standings>
  </team>
</fantasy_content>""".encode()

LEAGUE_XML = f"""
<?xml version="1.0" encoding="UTF-8"?>
<fantasy_content {_NAMESPACES} yahoo:uri="http://fantasysports.yahooapis.com/fantasy/v2/league/223.l.431">
  <league>
    <league_key>223.l.431</league_key>
    <league_id>341</league_id>
    <name>League Name</name>
    <url>http://football.fantasysports.yahoo.com/archive/pnfl/2009/431</url>
    <draft_status>postdraft</draft_status>
    <num_teams>14</num_teams>
    <weekly_deadline/>
    <current_week>16</current_week>
    <start_week>1</start_week>
    <end_week>16</end_week>
    <is_finished>1</is_finished>
    <settings>
      <draft_type>live</draft_type>
      <scoring_type>head</scoring_type>
      <uses_playoff>1</uses_playoff>
      <playoff_start_week>14</playoff_start_week>
    </settings>
    <players>
      <player>
        <player_key>223.p.8261</player_key>
        <player_id>8261</player_id>
        <name>
          <full>Adrian Peterson</full>
          <first>Adrian</first>
          <last>Peterson</last>
        </name>
        <display_position>RB</display_position>
        <eligible_positions>
          <position>RB</position>
          <position>FLEX</position>
        </eligible_positions>
        <player_points>
          <coverage_type>week</coverage_type>
          <week>16</week>
          <total>21.5</total>
        </player_points>
      </player>
    </players>
    <standings>
      <teams>
        <team>
          <team_key>223.l.431.t.1</team_key>
          <team_id>1</team_id>
          <team_points><total>1500.5</total></team_points>
          <team_standings><rank>1</rank></team_standings>
        </team>
        <team>
          <team_key>223.l.431.t.2</team_key>
          <team_id>2</team_id>
          <team_points><total/></team_points>
          <team_standings><rank/></team_standings>
        </team>
      </teams>
    </standings>
    <scoreboard>
      <week>15,16</week>
      <matchups>
        <matchup>
          <week>15</week>
          <teams>
            <team><team_key>223.l.431.t.1</team_key><team_points><total>101.25</total></team_points></team>
            <team><team_key>223.l.431.t.2</team_key><team_points><total>99</total></team_points></team>
          </teams>
        </matchup>
        <matchup>
          <week>16</week>
          <teams>
            <team><team_key>223.l.431.t.1</team_key><team_points><total/></team_points></team>
            <team><team_key>223.l.431.t.3</team_key><team_points><total>88.5</total></team_points></team>
          </teams>
        </matchup>
      </matchups>
    </scoreboard>
  </league>
</fantasy_content>""".encode()


@pytest.fixture
def team_xml() -> bytes:
    """A single team with points, projected points and standings."""
    return TEAM_XML


@pytest.fixture
def blank_numbers_xml() -> bytes:
    """A team whose totals, rank and one week are sent as empty tags."""
    return BLANK_NUMBERS_XML


@pytest.fixture
def league_xml() -> bytes:
    """A league with settings, players, standings and a two-week scoreboard."""
    return LEAGUE_XML


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Sets XDG_CONFIG_HOME, XDG_CACHE_HOME, and XDG_DATA_HOME to
    subdirectories of tmp_path so that tests never touch real user
    config, and clears all YFANTASY_* environment variables.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setattr("yfantasy.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))

    for var in [
        "YFANTASY_TOKEN",
        "YFANTASY_CLIENT_ID",
        "YFANTASY_TOKEN_SOURCE",
        "YFANTASY_CACHE_WINDOW",
    ]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN-format, quiet OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def verbose_output() -> OutputManager:
    """Install a colourless verbose OutputManager so debug lines reach stderr."""
    output = OutputManager(format=OutputFormat.PLAIN, no_color=True, verbose=True)
    set_output(output)
    yield output
    reset_output()
