"""Post-decode repair of numeric fields the API sends as empty tags.

The fantasy sports API emits ``<total/>`` and ``<rank/>`` instead of a
number whenever a score or rank is not available yet.  The decoder keeps
the raw text (:attr:`~yfantasy.models.Points.total_str`,
:attr:`~yfantasy.models.TeamStandings.rank_str`) and
:func:`repair_content` derives the numeric fields from it.

Repair only ever reads the raw text and writes the derived field, so
running it more than once gives the same result.  Blank or unparseable
text leaves the derived value at zero; it is never an error.
"""

from __future__ import annotations

from yfantasy.models import FantasyContent, League, Player, Points, Team, TeamStandings


def repair_content(content: FantasyContent) -> FantasyContent:
    """Derive every numeric total and rank in *content* from its raw text.

    The document is updated in place and returned for convenience.
    """
    repair_team(content.team)
    repair_league(content.league)
    for user in content.users:
        for game in user.games:
            for league in game.leagues:
                repair_league(league)
    return content


def repair_league(league: League) -> None:
    """Repair the teams, standings, scoreboard and players of a league."""
    for team in league.teams:
        repair_team(team)
    for team in league.standings:
        repair_team(team)
    for matchup in league.scoreboard.matchups:
        for team in matchup.teams:
            repair_team(team)
    _repair_players(league.players)


def repair_team(team: Team) -> None:
    """Repair a team, its players, and every team in its matchups at any depth."""
    repair_points(team.team_points)
    repair_points(team.team_projected_points)
    repair_rank(team.team_standings)
    _repair_players(team.roster.players)
    _repair_players(team.players)
    for matchup in team.matchups:
        for opponent in matchup.teams:
            repair_team(opponent)


def repair_points(points: Points) -> None:
    """Set ``points.total`` from ``points.total_str``; blank or invalid text gives ``0.0``."""
    points.total = _parse_float(points.total_str)


def repair_rank(standings: TeamStandings) -> None:
    """Set ``standings.rank`` from ``standings.rank_str``; blank or invalid text gives ``0``."""
    standings.rank = _parse_int(standings.rank_str)


def _repair_players(players: list[Player]) -> None:
    for player in players:
        repair_points(player.player_points)


def _parse_float(text: str) -> float:
    text = text.strip()
    if not text:
        return 0.0
    try:
        return float(text)
    except ValueError:
        return 0.0


def _parse_int(text: str) -> int:
    text = text.strip()
    if not text:
        return 0
    try:
        return int(text)
    except ValueError:
        return 0
