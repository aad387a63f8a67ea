"""Canonical Pydantic models shared across all yfantasy modules.

The models fall into two groups:

**Document models** -- the typed form of a ``fantasy_content`` XML
response: :class:`FantasyContent` and everything reachable from it
(:class:`League`, :class:`Team`, :class:`Player`, :class:`Points`, ...).
Field names follow the XML element names.  A field read from a
differently named element, or from a collection nested under a wrapper
element (``<players><player/>...</players>``), is declared with
:func:`element` and its path, e.g. ``"players/player"``; the decoder in
:mod:`yfantasy.content.xml` walks these paths.  Fields declared with
:func:`derived` are never read from XML; they are filled in by
:func:`yfantasy.content.repair.repair_content`.

Document models are populated by field name only, so the raw
``Points.total_str`` (element ``<total>``) and the derived
``Points.total`` never compete for the same input key.

**Configuration models** -- serialised as JSON in the user's config
directory: :class:`RequestConfig`, :class:`CacheConfig` and
:class:`Settings`.
"""

from __future__ import annotations

import enum
from typing import Any, Optional

from pydantic import BaseModel, Field


def element(path: str, **kwargs: Any) -> Any:
    """Declare a field read from the element at *path* rather than one named after the field."""
    return Field(json_schema_extra={"path": path}, **kwargs)


def derived(default: Any) -> Any:
    """Declare a field that is computed after decoding instead of read from XML."""
    return Field(default=default, json_schema_extra={"derived": True})


class XmlModel(BaseModel):
    """Base for document models."""


# --- Document models ---


class Name(XmlModel):
    """Name of a player."""

    full: str = ""
    first: str = ""
    last: str = ""


class SelectedPosition(XmlModel):
    """The position chosen for a player for a given week."""

    coverage_type: str = ""
    week: int = 0
    position: str = ""


class Points(XmlModel):
    """Scoring total for the period described by ``coverage_type``.

    Upstream sends ``<total/>`` when no score is available yet, so the raw
    text is kept in :attr:`total_str` and the number lives in :attr:`total`.
    """

    coverage_type: str = ""
    season: str = ""
    week: int = 0
    total_str: str = element("total", default="")
    total: float = derived(0.0)


class Record(XmlModel):
    """Number of wins, losses, and ties for a team in its league."""

    wins: int = 0
    losses: int = 0
    ties: int = 0


class TeamStandings(XmlModel):
    """How a single team ranks in its league."""

    rank_str: str = element("rank", default="")
    rank: int = derived(0)
    record: Record = element("outcome_totals", default_factory=Record)
    points_for: float = 0.0
    points_against: float = 0.0


class TeamLogo(XmlModel):
    """An image for a given team."""

    size: str = ""
    url: str = ""


class Manager(XmlModel):
    """A user in charge of a given team."""

    manager_id: int = 0
    nickname: str = ""
    guid: str = ""
    is_current_login: bool = False


class Player(XmlModel):
    """A single player for the given sport."""

    player_key: str = ""
    player_id: int = 0
    name: Name = Field(default_factory=Name)
    display_position: str = ""
    eligible_positions: list[str] = element("eligible_positions/position", default_factory=list)
    selected_position: SelectedPosition = Field(default_factory=SelectedPosition)
    player_points: Points = Field(default_factory=Points)


class Roster(XmlModel):
    """The set of players belonging to one team for a given week."""

    coverage_type: str = ""
    players: list[Player] = element("players/player", default_factory=list)
    week: int = 0


class Matchup(XmlModel):
    """Teams paired against one another for a given week."""

    week: int = 0
    teams: list[Team] = element("teams/team", default_factory=list)


class Team(XmlModel):
    """A participant in exactly one league."""

    team_key: str = ""
    team_id: int = 0
    name: str = ""
    url: str = ""
    team_logos: list[TeamLogo] = element("team_logos/team_logo", default_factory=list)
    is_owned_by_current_login: bool = False
    waiver_priority: int = 0
    number_of_moves: int = 0
    number_of_trades: int = 0
    managers: list[Manager] = element("managers/manager", default_factory=list)
    matchups: list[Matchup] = element("matchups/matchup", default_factory=list)
    roster: Roster = Field(default_factory=Roster)
    team_points: Points = Field(default_factory=Points)
    team_projected_points: Points = Field(default_factory=Points)
    team_standings: TeamStandings = Field(default_factory=TeamStandings)
    players: list[Player] = element("players/player", default_factory=list)


class LeagueSettings(XmlModel):
    """How a league is configured."""

    draft_type: str = ""
    scoring_type: str = ""
    uses_playoff: bool = False
    playoff_start_week: int = 0


class Scoreboard(XmlModel):
    """Matchups that occurred for one or more weeks.

    ``weeks`` keeps the raw ``week`` text since a multi-week scoreboard
    reports a comma separated list.
    """

    weeks: str = element("week", default="")
    matchups: list[Matchup] = element("matchups/matchup", default_factory=list)


class League(XmlModel):
    """A uniquely identifiable group of players and teams."""

    league_key: str = ""
    league_id: int = 0
    name: str = ""
    url: str = ""
    players: list[Player] = element("players/player", default_factory=list)
    teams: list[Team] = element("teams/team", default_factory=list)
    draft_status: str = ""
    current_week: int = 0
    start_week: int = 0
    end_week: int = 0
    is_finished: bool = False
    standings: list[Team] = element("standings/teams/team", default_factory=list)
    scoreboard: Scoreboard = Field(default_factory=Scoreboard)
    settings: LeagueSettings = Field(default_factory=LeagueSettings)


class Game(XmlModel):
    """A single season of a fantasy game, made of zero or more leagues."""

    leagues: list[League] = element("leagues/league", default_factory=list)


class User(XmlModel):
    """The games a user is participating in."""

    games: list[Game] = element("games/game", default_factory=list)


class FantasyContent(XmlModel):
    """Root of every response from the fantasy sports API.

    Only the branches relevant to the requested resource are populated;
    the others stay default-constructed.
    """

    league: League = Field(default_factory=League)
    team: Team = Field(default_factory=Team)
    users: list[User] = element("users/user", default_factory=list)


Matchup.model_rebuild()
Team.model_rebuild()


# --- Configuration models ---


class RequestConfig(BaseModel):
    """HTTP request settings applied to every API call."""

    timeout: float = Field(default=30.0, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")
    max_attempts: int = Field(
        default=4,
        ge=1,
        description="Attempts made when the API reports consumer_key_unknown",
    )


class CacheBackend(str, enum.Enum):
    """Where cached fantasy content is kept."""

    MEMORY = "memory"
    DISK = "disk"


class CacheConfig(BaseModel):
    """Fantasy content cache settings stored in :class:`Settings`."""

    enabled: bool = Field(default=True, description="Enable content caching")
    backend: CacheBackend = Field(
        default=CacheBackend.MEMORY, description="Cache backend: memory or disk"
    )
    window_seconds: int = Field(
        default=3600, ge=1, description="Length of an epoch-aligned cache window"
    )
    capacity: int = Field(
        default=1000, ge=1, description="Maximum number of cached documents"
    )
    size_limit: int = Field(
        default=256 * 1024 * 1024, description="Maximum size in bytes (disk backend)"
    )
    directory: Optional[str] = Field(
        default=None, description="Disk cache directory (defaults to the XDG cache dir)"
    )


class Settings(BaseModel):
    """User-wide configuration persisted at ``~/.config/yfantasy/config.json``.

    Loaded and saved by :func:`~yfantasy.config.load_settings` and
    :func:`~yfantasy.config.save_settings`.  ``client_id`` namespaces cache
    keys so several applications can share one cache store.
    """

    client_id: str = "yfantasy"
    token_source: str = Field(
        default="env:YFANTASY_TOKEN",
        description="Credential source for the OAuth access token: env:VAR, file:/path, prompt",
    )
    request: RequestConfig = Field(default_factory=RequestConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
