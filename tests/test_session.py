import pytest

from hovercat.obstacles import Obstacle
from hovercat.score import HighScoreStore
from hovercat.signals import Signal
from hovercat.state import SessionState

DT = 1 / 60


def start(session):
    session.tick(DT, [Signal.CONFIRM])
    assert session.state is SessionState.RUNNING
    return session


def crash(session, limit=600):
    for _ in range(limit):
        session.tick(DT)
        if session.state is SessionState.GAME_OVER:
            return session
    raise AssertionError("player never crashed")


def snapshot(session):
    return (
        session.player.x, session.player.y, session.player.velocity,
        [(o.x, o.gap_center, o.scored) for o in session.obstacles],
        session.obstacles.spawn_timer,
        session.score.current, session.score.high,
        session.difficulty.speed, session.background_offset,
    )


def test_intro_does_not_simulate(make_session):
    session = make_session()
    before = snapshot(session)
    for _ in range(30):
        session.tick(DT, [Signal.FLAP])
    assert session.state is SessionState.INTRO
    assert snapshot(session) == before


def test_confirm_starts_music_and_simulation(make_session, audio):
    session = start(make_session())
    assert audio.calls == ["start_music"]
    assert session.music_playing
    # The first run spawns an obstacle straight away
    assert len(session.obstacles) == 1
    assert session.player.velocity > 0


def test_zero_dt_changes_nothing(make_session, audio):
    session = start(make_session())
    session.tick(DT)
    before = snapshot(session)
    for _ in range(10):
        session.tick(0.0, [Signal.FLAP])
    assert snapshot(session) == before
    assert "play_flap" not in audio.calls


def test_zero_dt_still_handles_menus(make_session):
    session = make_session()
    session.tick(0.0, [Signal.CONFIRM])
    assert session.state is SessionState.RUNNING
    session.tick(0.0, [Signal.PAUSE_TOGGLE])
    assert session.state is SessionState.PAUSED


def test_flap(make_session, audio):
    session = start(make_session())
    session.tick(DT, [Signal.FLAP])
    assert session.player.velocity == pytest.approx(-550 + 1500 * DT)
    assert audio.count("play_flap") == 1
    assert session.eyes_closed


def test_eyes_open_again_after_timer(make_session):
    session = start(make_session(eyes_closed_duration=0.1))
    session.tick(DT, [Signal.FLAP])
    for _ in range(10):
        session.tick(DT)
    assert not session.eyes_closed


def test_pause_freezes_world_and_music(make_session, audio):
    session = start(make_session())
    session.tick(DT, [Signal.PAUSE_TOGGLE])
    before = snapshot(session)
    for _ in range(60):
        session.tick(DT, [Signal.FLAP])
    assert snapshot(session) == before
    assert audio.calls[-1] == "pause_music"
    session.tick(DT, [Signal.PAUSE_TOGGLE])
    assert session.state is SessionState.RUNNING
    assert audio.calls[-1] == "resume_music"


def test_focus_loss_freezes_world(make_session):
    session = start(make_session())
    session.tick(DT, focused=False)
    assert session.state is SessionState.UNFOCUSED_PAUSE
    before = snapshot(session)
    session.tick(DT, [Signal.FLAP], focused=False)
    assert snapshot(session) == before
    session.tick(DT, focused=True)
    assert session.state is SessionState.RUNNING


def test_falling_out_of_the_field_ends_the_game(make_session, audio, score_path):
    session = crash(start(make_session()))
    assert session.state is SessionState.GAME_OVER
    assert audio.calls[-3:] == ["stop_music", "stop_effects", "play_hit"]
    assert audio.count("play_hit") == 1
    assert session.eyes_closed


def test_game_over_freezes_world(make_session):
    session = crash(start(make_session()))
    before = snapshot(session)
    for _ in range(10):
        session.tick(DT, [Signal.FLAP])
    assert snapshot(session) == before


def test_double_collision_triggers_once(make_session, audio):
    session = start(make_session())
    session.player.y = 5.0
    session.obstacles.obstacles.append(Obstacle(300.0, 700.0))
    session.tick(DT)
    assert session.state is SessionState.GAME_OVER
    assert audio.count("play_hit") == 1
    assert audio.count("stop_music") == 1


def test_passing_an_obstacle_scores_once(make_session, audio, score_path):
    session = start(make_session())
    session.obstacles.obstacles = [Obstacle(215.0, 400.0)]
    session.tick(DT)
    assert session.score.current == 1
    assert session.score.high == 1
    assert HighScoreStore(score_path).load() == 1
    session.tick(DT)
    assert session.score.current == 1
    assert audio.count("play_score") == 1
    assert session.state is SessionState.RUNNING


def test_high_score_never_below_current(make_session):
    session = start(make_session())
    for x in (215.0, 214.0, 213.0):
        session.obstacles.obstacles.append(Obstacle(x, 400.0))
        session.tick(DT)
        assert session.score.high >= session.score.current
    crash(session)
    assert session.score.high >= session.score.current == 3


def test_high_score_loaded_at_start(make_session, score_path):
    HighScoreStore(score_path).save(17)
    assert make_session().score.high == 17


def test_restart_waits_for_lockout(make_session):
    session = crash(start(make_session(game_over_delay=0.5)))
    session.tick(DT, [Signal.CONFIRM])
    assert session.state is SessionState.GAME_OVER


def test_restart_resets_the_world(make_session, audio):
    session = start(make_session(game_over_delay=0.5))
    session.obstacles.obstacles.append(Obstacle(215.0, 400.0))
    session.tick(DT)
    crash(session)
    session.tick(0.6)
    session.tick(DT, [Signal.CONFIRM])

    assert session.state is SessionState.RUNNING
    assert session.score.current == 0
    assert session.score.high == 1
    assert session.difficulty.speed == session.config.base_speed
    assert len(session.obstacles) == 0
    assert (session.player.x, session.player.y) == session.config.player_start
    assert session.player.velocity == 0.0
    assert audio.calls[-1] == "start_music"


def test_restart_spawns_after_a_full_interval(make_session):
    session = start(make_session(game_over_delay=0.0, gravity=0.0))
    session.player.y = -100.0
    session.tick(DT)
    assert session.state is SessionState.GAME_OVER
    session.tick(DT, [Signal.CONFIRM])
    session.tick(1.0)
    assert len(session.obstacles) == 0
    session.tick(1.0)
    assert len(session.obstacles) == 1


def test_music_toggle_is_remembered_across_restart(make_session, audio):
    session = start(make_session(game_over_delay=0.0))
    session.tick(DT, [Signal.MUSIC_TOGGLE])
    assert not session.music_playing
    assert session.music_disabled
    crash(session)
    session.tick(DT, [Signal.CONFIRM])
    assert session.state is SessionState.RUNNING
    assert audio.count("start_music") == 1
    session.tick(DT, [Signal.MUSIC_TOGGLE])
    assert session.music_playing
    assert audio.count("start_music") == 2


def test_exit_confirm_flow(make_session):
    session = start(make_session())
    session.tick(DT, [Signal.EXIT_REQUEST])
    assert session.state is SessionState.EXIT_CONFIRM
    before = snapshot(session)
    session.tick(DT, [Signal.FLAP])
    assert snapshot(session) == before
    session.tick(DT, [Signal.CANCEL])
    assert session.state is SessionState.RUNNING
    assert not session.exit_confirmed
    session.tick(DT, [Signal.EXIT_REQUEST, Signal.CONFIRM])
    assert session.exit_confirmed


def test_exit_cancel_from_game_over_keeps_game_over(make_session):
    session = crash(start(make_session()))
    session.tick(DT, [Signal.EXIT_REQUEST])
    session.tick(DT, [Signal.CANCEL])
    assert session.state is SessionState.GAME_OVER


def test_background_scroll_wraps(make_session):
    session = start(make_session(background_width=100.0))
    session.background_offset = 99.9
    session.tick(DT)
    assert 0.0 <= session.background_offset < 100.0


def test_speed_ramps_while_running(make_session):
    session = start(make_session(speed_increase=20.0, max_speed=400.0))
    last = session.difficulty.speed
    for _ in range(30):
        session.tick(DT, [Signal.FLAP])
        assert session.difficulty.speed >= last
        last = session.difficulty.speed
    assert last > session.config.base_speed
