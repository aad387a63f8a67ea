"""Tests for decoding fantasy_content XML into document models."""

from __future__ import annotations

import pytest

from yfantasy.content.xml import decode_content
from yfantasy.exceptions import ContentError, ParseError


# ---------------------------------------------------------------------------
# Team documents
# ---------------------------------------------------------------------------


class TestTeamDocument:
    def test_scalar_fields(self, team_xml) -> None:
        team = decode_content(team_xml).team

        assert team.team_key == "223.l.431.t.1"
        assert team.team_id == 1
        assert team.name == "Team Name"
        assert team.url == "http://football.fantasysports.yahoo.com/archive/pnfl/2009/431/1"

    def test_wrapped_collections(self, team_xml) -> None:
        team = decode_content(team_xml).team

        assert [logo.size for logo in team.team_logos] == ["medium"]
        assert team.team_logos[0].url == "http://example.com/logo.png"
        assert len(team.managers) == 1
        assert team.managers[0].manager_id == 13
        assert team.managers[0].nickname == "Nickname"
        assert team.managers[0].guid == "1234567890"

    def test_points_keep_raw_text(self, team_xml) -> None:
        team = decode_content(team_xml).team

        assert team.team_points.coverage_type == "week"
        assert team.team_points.week == 16
        assert team.team_points.total_str == "123.450000"
        assert team.team_projected_points.total_str == "543.210000"
        # Derived values are filled in by repair, not by decoding.
        assert team.team_points.total == 0.0

    def test_standings(self, team_xml) -> None:
        standings = decode_content(team_xml).team.team_standings

        assert standings.rank_str == "5"
        assert standings.rank == 0
        assert standings.record.wins == 9
        assert standings.record.losses == 4
        assert standings.points_for == pytest.approx(1500.5)
        assert standings.points_against == 0.0

    def test_unrequested_branches_are_defaults(self, team_xml) -> None:
        content = decode_content(team_xml)

        assert content.league.league_key == ""
        assert content.league.teams == []
        assert content.users == []

    def test_blank_numbers_accepted(self, blank_numbers_xml) -> None:
        team = decode_content(blank_numbers_xml).team

        assert team.team_points.total_str == ""
        assert team.team_projected_points.total_str == ""
        assert team.team_projected_points.week == 0
        assert team.team_standings.rank_str == ""


# ---------------------------------------------------------------------------
# League documents
# ---------------------------------------------------------------------------


class TestLeagueDocument:
    def test_league_fields(self, league_xml) -> None:
        league = decode_content(league_xml).league

        assert league.league_key == "223.l.431"
        assert league.league_id == 341
        assert league.draft_status == "postdraft"
        assert league.current_week == 16
        assert league.start_week == 1
        assert league.end_week == 16
        assert league.is_finished is True

    def test_settings(self, league_xml) -> None:
        settings = decode_content(league_xml).league.settings

        assert settings.draft_type == "live"
        assert settings.scoring_type == "head"
        assert settings.uses_playoff is True
        assert settings.playoff_start_week == 14

    def test_players(self, league_xml) -> None:
        (player,) = decode_content(league_xml).league.players

        assert player.player_key == "223.p.8261"
        assert player.name.full == "Adrian Peterson"
        assert player.name.last == "Peterson"
        assert player.display_position == "RB"
        assert player.eligible_positions == ["RB", "FLEX"]
        assert player.player_points.total_str == "21.5"

    def test_standings_path(self, league_xml) -> None:
        standings = decode_content(league_xml).league.standings

        assert [t.team_key for t in standings] == ["223.l.431.t.1", "223.l.431.t.2"]
        assert standings[0].team_standings.rank_str == "1"

    def test_scoreboard(self, league_xml) -> None:
        scoreboard = decode_content(league_xml).league.scoreboard

        assert scoreboard.weeks == "15,16"
        assert [m.week for m in scoreboard.matchups] == [15, 16]
        assert [t.team_key for t in scoreboard.matchups[1].teams] == [
            "223.l.431.t.1",
            "223.l.431.t.3",
        ]


class TestUsersDocument:
    def test_users_games_leagues(self) -> None:
        xml = b"""<fantasy_content>
          <users><user>
            <games><game>
              <leagues>
                <league><league_key>223.l.431</league_key></league>
                <league><league_key>242.l.7</league_key></league>
              </leagues>
            </game></games>
          </user></users>
        </fantasy_content>"""
        content = decode_content(xml)

        leagues = content.users[0].games[0].leagues
        assert [league.league_key for league in leagues] == ["223.l.431", "242.l.7"]

    def test_team_matchups_nest(self) -> None:
        xml = b"""<fantasy_content><team>
          <team_key>t.1</team_key>
          <matchups><matchup>
            <week>3</week>
            <teams>
              <team><team_key>t.1</team_key></team>
              <team><team_key>t.2</team_key></team>
            </teams>
          </matchup></matchups>
        </team></fantasy_content>"""
        team = decode_content(xml).team

        assert team.matchups[0].week == 3
        assert [t.team_key for t in team.matchups[0].teams] == ["t.1", "t.2"]


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


class TestFailures:
    def test_wrong_root_element(self) -> None:
        with pytest.raises(ParseError, match="fantasy_content"):
            decode_content(b"<not-valid-xml/>")

    def test_malformed_xml(self) -> None:
        with pytest.raises(ParseError):
            decode_content(b"<fantasy_content><team>")

    def test_empty_body(self) -> None:
        with pytest.raises(ParseError):
            decode_content(b"")

    def test_invalid_number(self) -> None:
        xml = b"<fantasy_content><team><team_id>abc</team_id></team></fantasy_content>"
        with pytest.raises(ParseError):
            decode_content(xml)

    def test_parse_error_is_content_error(self) -> None:
        with pytest.raises(ContentError):
            decode_content(b"not xml at all")
