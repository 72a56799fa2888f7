from focusplay.core.timer_engine import PomodoroEngine
from focusplay.services.timer_service import TimerService


# ---- per-task live timer ----
def test_start_is_idempotent(app, clock):
    t = app.tasks.create_task(title="a")
    assert app.tasks.start_timer(t.id)
    first = t.timer_start
    clock.advance(minutes=3)
    assert not app.tasks.start_timer(t.id)
    assert t.timer_start == first
    assert t.is_timing


def test_pause_start_pause_appends_two_sessions(app, clock):
    t = app.tasks.create_task(title="a")
    app.tasks.start_timer(t.id)
    clock.advance(minutes=20)
    app.tasks.pause_timer(t.id)
    app.tasks.start_timer(t.id)
    app.tasks.pause_timer(t.id)

    assert len(t.sessions) == 2
    assert [s.minutes for s in t.sessions] == [20, 0]
    assert all(s.start <= s.end for s in t.sessions)
    assert not t.is_timing
    assert t.timer_start is None


def test_stop_rounds_minutes_half_up(app, clock):
    t = app.tasks.create_task(title="a")
    app.tasks.start_timer(t.id)
    clock.advance(minutes=29.5)
    s = app.tasks.end_timer(t.id)
    assert s.minutes == 30
    assert s.end - s.start == 1_770_000


def test_stop_accumulates_hours_and_status(app, clock):
    t = app.tasks.create_task(title="a", total_hours=1)

    app.tasks.start_timer(t.id)
    clock.advance(minutes=30)
    app.tasks.pause_timer(t.id)
    assert t.hours_done == 0.5
    assert t.progress == 50
    assert t.status == "doing"
    assert t.last_update == clock.now

    app.tasks.start_timer(t.id)
    clock.advance(minutes=30)
    app.tasks.end_timer(t.id)
    assert t.hours_done == 1.0
    assert t.progress == 100
    assert t.status == "done"


def test_stop_without_goal_keeps_user_progress(app, clock):
    t = app.tasks.create_task(title="a")
    app.tasks.set_progress(t.id, 40)
    app.tasks.start_timer(t.id)
    clock.advance(minutes=90)
    app.tasks.pause_timer(t.id)
    assert t.progress == 40
    assert t.hours_done == 1.5


def test_pause_on_idle_task_does_nothing(app):
    t = app.tasks.create_task(title="a")
    assert app.tasks.pause_timer(t.id) is None
    assert app.tasks.end_timer(t.id) is None
    assert t.sessions == []
    assert t.status == "todo"


# ---- pomodoro engine ----
def test_engine_focus_to_break_counts_and_keeps_running():
    e = PomodoroEngine(focus_sec=3, break_sec=2)
    e.start()
    assert [e.tick() for _ in range(3)] == [False, False, True]
    snap = e.snapshot()
    assert snap.phase == "break"
    assert snap.remaining_sec == 2
    assert snap.is_running
    assert snap.completed == 1


def test_engine_break_to_focus_halts():
    e = PomodoroEngine(focus_sec=3, break_sec=2)
    e.start()
    for _ in range(5):
        e.tick()
    assert e.phase == "focus"
    assert e.remaining_sec == 3
    assert not e.is_running
    assert e.tick() is False


def test_engine_pause_and_reset():
    e = PomodoroEngine(focus_sec=10, break_sec=2)
    e.start()
    e.tick()
    e.pause()
    assert e.tick() is False
    assert e.remaining_sec == 9

    e.start()
    e.reset()
    assert not e.is_running
    assert e.remaining_sec == 10
    assert e.phase == "focus"


def test_engine_set_duration():
    e = PomodoroEngine()
    assert e.set_duration(45)
    assert e.remaining_sec == 45 * 60
    assert e.focus_sec == 45 * 60
    assert not e.set_duration(0)
    assert not e.set_duration(500)
    assert not e.set_duration("abc")
    assert e.focus_sec == 45 * 60


# ---- pomodoro orchestration ----
def test_focus_completion_credits_focused_task(app):
    timer = TimerService(app.tasks, focus_sec=2, break_sec=1)
    celebrations = []
    phases = []
    app.tasks.set_on_celebrate(lambda: celebrations.append(1))
    timer.set_on_phase_change(lambda snap: phases.append(snap.phase))

    t = app.tasks.create_task(title="a", total_hours=10)
    timer.toggle_focus(t.id)
    timer.start()
    timer.tick()
    timer.tick()

    assert phases == ["break"]
    assert app.tasks.meta.xp == 15
    assert celebrations == [1]
    # always 25 minutes, even for a 2 second focus phase
    assert t.hours_done == round(25 / 60, 2)
    assert t.sessions == []
    assert t.status == "doing"

    timer.tick()
    assert phases == ["break", "focus"]
    assert not timer.get_snapshot().is_running


def test_focus_completion_without_focus_only_grants_xp(app):
    timer = TimerService(app.tasks, focus_sec=1, break_sec=1)
    t = app.tasks.create_task(title="a")
    timer.start()
    timer.tick()
    assert app.tasks.meta.xp == 15
    assert t.hours_done == 0


def test_removed_focus_task_is_forgotten(app):
    timer = TimerService(app.tasks, focus_sec=1, break_sec=1)
    t = app.tasks.create_task(title="a")
    timer.set_focused_task(t.id)
    app.tasks.remove_task(t.id)
    timer.start()
    timer.tick()
    assert timer.focused_task_id is None
    assert app.tasks.meta.xp == 15


def test_toggle_focus():
    timer = TimerService(task_service=None)
    assert timer.toggle_focus("x") == "x"
    assert timer.toggle_focus("x") is None


def test_service_commands_emit_callbacks(app):
    timer = TimerService(app.tasks, focus_sec=5, break_sec=2)
    states = []
    ticks = []
    timer.set_on_state_change(lambda snap: states.append(snap.is_running))
    timer.set_on_tick(lambda snap: ticks.append(snap.remaining_sec))

    timer.start()
    timer.tick()
    timer.pause()
    timer.tick()  # paused, nothing happens
    assert states == [True, False]
    assert ticks == [5, 4, 4]
    assert timer.get_snapshot().remaining_sec == 4

    timer.reset()
    assert states[-1] is False
    assert timer.get_snapshot().remaining_sec == 5
    assert timer.get_snapshot().phase == "focus"


def test_service_set_duration(app):
    timer = TimerService(app.tasks)
    states = []
    timer.set_on_state_change(lambda snap: states.append(snap.remaining_sec))

    assert timer.set_duration(60)
    assert states == [3600]
    assert not timer.set_duration(0)
    assert not timer.set_duration("soon")
    assert states == [3600]

    timer.start()
    timer.reset()
    assert timer.get_snapshot().remaining_sec == 3600
    assert not timer.get_snapshot().is_running
