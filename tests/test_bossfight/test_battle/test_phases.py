import pytest
from collections import Counter
from arena.core.rng import create_rng
from bossfight.battle.actions import Action
from bossfight.battle.context import BattleContext
from bossfight.battle.errors import RulesTableError
from bossfight.battle.narration import BattleEvent
from bossfight.battle.phases import (
    PHASE_RULES,
    Matchup,
    Outcome,
    Phase,
    PhaseRules,
    _validate_rules,
    check_transition,
    choose_action,
    find_matchup,
    resolve,
)

A, D, M, C = Action.ATTACK, Action.DEFEND, Action.MAGIC, Action.COUNTER

# Table data

def test_every_phase_has_rules():
    assert set(PHASE_RULES) == set(Phase)

@pytest.mark.parametrize("phase", list(Phase))
def test_weights_sum_to_100(phase):
    assert sum(weight for _, weight in phase.rules.weights) == 100

@pytest.mark.parametrize("phase,expected", [
    (Phase.NORMAL, {A: 25, D: 25, M: 25, C: 25}),
    (Phase.ANGRY, {A: 50, D: 0, M: 20, C: 30}),
    (Phase.DEFENSIVE, {A: 0, D: 60, M: 10, C: 30}),
    (Phase.ENRAGED, {A: 70, D: 0, M: 20, C: 10}),
])
def test_weight_tables(phase, expected):
    assert dict(phase.rules.weights) == expected

def test_phase_order_and_thresholds():
    assert Phase.NORMAL.rules.next_phase is Phase.ANGRY
    assert Phase.ANGRY.rules.next_phase is Phase.DEFENSIVE
    assert Phase.DEFENSIVE.rules.next_phase is Phase.ENRAGED
    assert Phase.ENRAGED.rules.next_phase is None
    assert check_transition(Phase.ENRAGED, 0.0) is None

    assert [p.rules.threshold for p in Phase] == [0.75, 0.50, 0.25, None]

def test_rules_descriptions():
    assert Phase.NORMAL.rules.description == "COUNTER>ALL | ATTACK>MAGIC | MAGIC>DEFEND | DEFEND>ATTACK"
    assert Phase.ENRAGED.rules.description == "DEFEND>ATTACK | ATTACK>MAGIC | MAGIC>COUNTER | COUNTER>DEFEND"

def test_validation_rejects_bad_weights():
    rules = PhaseRules(
        name="broken",
        weights=((A, 50), (D, 50), (M, 10), (C, 0)),
        clash_damage=10,
        player_wins=(),
        boss_wins=(),
        fallback_damage=10,
        threshold=None,
        next_phase=None,
        transition_message="",
    )
    with pytest.raises(RulesTableError):
        _validate_rules(Phase.ENRAGED, rules)

def test_validation_rejects_broken_mirror():
    rules = PhaseRules(
        name="broken",
        weights=((A, 25), (D, 25), (M, 25), (C, 25)),
        clash_damage=10,
        player_wins=(Matchup(A, D, 30, "hit"),),
        boss_wins=(Matchup(A, D, 20, "hit"),),
        fallback_damage=10,
        threshold=None,
        next_phase=None,
        transition_message="",
    )
    with pytest.raises(RulesTableError):
        _validate_rules(Phase.ENRAGED, rules)

def test_validation_rejects_skipping_a_phase():
    rules = PhaseRules(
        name="broken",
        weights=((A, 25), (D, 25), (M, 25), (C, 25)),
        clash_damage=10,
        player_wins=(),
        boss_wins=(),
        fallback_damage=10,
        threshold=0.5,
        next_phase=Phase.DEFENSIVE,
        transition_message="",
    )
    with pytest.raises(RulesTableError):
        _validate_rules(Phase.NORMAL, rules)

# Action choice

@pytest.mark.parametrize("roll,expected", [
    (0, A), (24, A), (25, D), (49, D), (50, M), (74, M), (75, C), (99, C),
])
def test_normal_roll_boundaries(scripted_rng, roll, expected):
    assert choose_action(Phase.NORMAL, scripted_rng(roll)) is expected

@pytest.mark.parametrize("roll,expected", [
    (0, A), (49, A), (50, M), (69, M), (70, C), (99, C),
])
def test_angry_never_defends(scripted_rng, roll, expected):
    assert choose_action(Phase.ANGRY, scripted_rng(roll)) is expected

def test_zero_weight_actions_never_chosen():
    rng = create_rng(123)
    assert D not in {choose_action(Phase.ANGRY, rng) for _ in range(2000)}
    assert A not in {choose_action(Phase.DEFENSIVE, rng) for _ in range(2000)}
    assert D not in {choose_action(Phase.ENRAGED, rng) for _ in range(2000)}

@pytest.mark.parametrize("phase", list(Phase))
def test_action_frequencies_follow_weights(phase):
    rng = create_rng(2024)
    samples = 20000
    counts = Counter(choose_action(phase, rng) for _ in range(samples))

    for action in Action:
        expected = dict(phase.rules.weights)[action] / 100
        assert abs(counts[action] / samples - expected) < 0.02

# Resolution

CL, PW, BW, FB = Outcome.CLASH, Outcome.PLAYER_WINS, Outcome.BOSS_WINS, Outcome.FALLBACK
N, G, S, E = Phase.NORMAL, Phase.ANGRY, Phase.DEFENSIVE, Phase.ENRAGED

# (phase, player move, boss move, outcome, damage to boss, damage to player)
FULL_TABLE = [
    (N, A, A, CL, 10, 10), (N, A, D, FB, 0, 25), (N, A, M, PW, 25, 0), (N, A, C, BW, 0, 40),
    (N, D, A, PW, 15, 0), (N, D, D, CL, 10, 10), (N, D, M, FB, 0, 25), (N, D, C, BW, 0, 40),
    (N, M, A, FB, 0, 25), (N, M, D, PW, 30, 0), (N, M, M, CL, 10, 10), (N, M, C, BW, 0, 40),
    (N, C, A, PW, 40, 0), (N, C, D, PW, 40, 0), (N, C, M, PW, 40, 0), (N, C, C, CL, 10, 10),

    (G, A, A, CL, 15, 15), (G, A, D, PW, 35, 0), (G, A, M, FB, 0, 30), (G, A, C, BW, 0, 50),
    (G, D, A, BW, 0, 35), (G, D, D, CL, 15, 15), (G, D, M, PW, 20, 0), (G, D, C, FB, 0, 30),
    (G, M, A, FB, 0, 30), (G, M, D, BW, 0, 20), (G, M, M, CL, 15, 15), (G, M, C, PW, 35, 0),
    (G, C, A, PW, 50, 0), (G, C, D, FB, 0, 30), (G, C, M, BW, 0, 35), (G, C, C, CL, 15, 15),

    (S, A, A, CL, 12, 12), (S, A, D, BW, 0, 25), (S, A, M, FB, 0, 28), (S, A, C, PW, 30, 0),
    (S, D, A, PW, 25, 0), (S, D, D, CL, 12, 12), (S, D, M, BW, 0, 40), (S, D, C, FB, 0, 28),
    (S, M, A, FB, 0, 28), (S, M, D, PW, 40, 0), (S, M, M, CL, 12, 12), (S, M, C, BW, 0, 45),
    (S, C, A, BW, 0, 30), (S, C, D, FB, 0, 28), (S, C, M, PW, 45, 0), (S, C, C, CL, 12, 12),

    (E, A, A, CL, 20, 20), (E, A, D, BW, 0, 35), (E, A, M, PW, 45, 0), (E, A, C, FB, 0, 38),
    (E, D, A, PW, 35, 0), (E, D, D, CL, 20, 20), (E, D, M, FB, 0, 38), (E, D, C, BW, 0, 60),
    (E, M, A, BW, 0, 45), (E, M, D, FB, 0, 38), (E, M, M, CL, 20, 20), (E, M, C, PW, 40, 0),
    (E, C, A, FB, 0, 38), (E, C, D, PW, 60, 0), (E, C, M, BW, 0, 40), (E, C, C, CL, 20, 20),
]

def test_full_table_covers_every_pair():
    assert len({(phase, player, boss) for phase, player, boss, *_ in FULL_TABLE}) == 64

@pytest.mark.parametrize("phase,player,boss,outcome,boss_damage,player_damage", FULL_TABLE)
def test_full_resolution_table(ctx, phase, player, boss, outcome, boss_damage, player_damage):
    result = resolve(phase, player, boss, ctx)

    assert result.outcome is outcome
    assert result.boss_damage == boss_damage
    assert result.player_damage == player_damage
    assert ctx.boss_hp == 200 - boss_damage
    assert ctx.player_hp == 100 - player_damage

@pytest.mark.parametrize("phase,player,boss,damage", [
    (Phase.NORMAL, C, A, 40),
    (Phase.ANGRY, M, C, 35),
    (Phase.DEFENSIVE, A, C, 30),
    (Phase.ENRAGED, C, D, 60),
])
def test_player_wins_scenarios(ctx, phase, player, boss, damage):
    result = resolve(phase, player, boss, ctx)

    assert result.outcome is Outcome.PLAYER_WINS
    assert result.boss_damage == damage
    assert result.player_damage == 0
    assert ctx.boss_hp == 200 - damage
    assert ctx.player_hp == 100

@pytest.mark.parametrize("phase", list(Phase))
@pytest.mark.parametrize("action", list(Action))
def test_clash_symmetry(hero, phase, action):
    ctx = BattleContext(hero)
    result = resolve(phase, action, action, ctx)

    clash = phase.rules.clash_damage
    assert result.outcome is Outcome.CLASH
    assert result.boss_damage == result.player_damage == clash
    assert ctx.boss_hp == 200 - clash
    assert ctx.player_hp == 100 - clash

def test_clash_damage_values():
    assert [p.rules.clash_damage for p in Phase] == [10, 15, 12, 20]

@pytest.mark.parametrize("boss", [A, D, M])
def test_normal_player_counter_beats_everything(ctx, boss):
    result = resolve(Phase.NORMAL, C, boss, ctx)
    assert result.outcome is Outcome.PLAYER_WINS
    assert result.boss_damage == 40

@pytest.mark.parametrize("player", [A, D, M])
def test_normal_boss_counter_beats_everything(ctx, player):
    result = resolve(Phase.NORMAL, player, C, ctx)
    assert result.outcome is Outcome.BOSS_WINS
    assert result.player_damage == 40
    assert ctx.boss_hp == 200

def test_normal_fallback(ctx):
    result = resolve(Phase.NORMAL, A, D, ctx)

    assert result.outcome is Outcome.FALLBACK
    assert result.player_damage == 25
    assert result.message == "The boss's DEFEND beats your ATTACK!"

@pytest.mark.parametrize("phase", [Phase.ANGRY, Phase.DEFENSIVE, Phase.ENRAGED])
def test_boss_wins_mirror_player_wins(phase):
    for matchup in phase.rules.player_wins:
        outcome, mirrored = find_matchup(phase, matchup.loser, matchup.winner)
        assert outcome is Outcome.BOSS_WINS
        assert mirrored.damage == matchup.damage

@pytest.mark.parametrize("phase,damage", [
    (Phase.NORMAL, 25), (Phase.ANGRY, 30), (Phase.DEFENSIVE, 28), (Phase.ENRAGED, 38),
])
def test_every_pair_is_decided(phase, damage):
    fallbacks = 0
    for player in Action:
        for boss in Action:
            outcome, _ = find_matchup(phase, player, boss)
            fallbacks += outcome is Outcome.FALLBACK
    assert fallbacks > 0
    assert phase.rules.fallback_damage == damage

def test_angry_fallback(ctx):
    result = resolve(Phase.ANGRY, A, M, ctx)
    assert result.outcome is Outcome.FALLBACK
    assert result.player_damage == 30

def test_boss_wins_while_defending(ctx):
    ctx.player_defending = True
    result = resolve(Phase.ANGRY, D, A, ctx)

    assert result.outcome is Outcome.BOSS_WINS
    assert result.player_damage == 17
    assert ctx.player_hp == 83

def test_resolution_is_narrated(ctx):
    resolve(Phase.NORMAL, A, A, ctx)

    events = [n.event for n in ctx.narrator.drain()]
    assert events == [
        BattleEvent.CLASH,
        BattleEvent.DAMAGE_DEALT,
        BattleEvent.DAMAGE_DEALT,
        BattleEvent.EXCHANGE_RESOLVED,
    ]

# Transitions

def test_transition_boundary(ctx):
    ctx.deal_damage_to_boss(49)
    assert check_transition(Phase.NORMAL, ctx.boss_hp_percent()) is None

    ctx.deal_damage_to_boss(1)
    assert ctx.boss_hp == 150
    assert check_transition(Phase.NORMAL, ctx.boss_hp_percent()) is Phase.ANGRY

    ctx.deal_damage_to_boss(1)
    assert check_transition(Phase.NORMAL, ctx.boss_hp_percent()) is Phase.ANGRY

@pytest.mark.parametrize("phase,hp_percent,expected", [
    (Phase.ANGRY, 0.51, None),
    (Phase.ANGRY, 0.50, Phase.DEFENSIVE),
    (Phase.DEFENSIVE, 0.25, Phase.ENRAGED),
    (Phase.DEFENSIVE, 0.26, None),
    (Phase.ENRAGED, 0.0, None),
])
def test_transition_thresholds(phase, hp_percent, expected):
    assert check_transition(phase, hp_percent) is expected

def test_transitions_only_move_forward():
    for phase in Phase:
        for hp in range(0, 201):
            next_phase = check_transition(phase, hp / 200)
            if next_phase is not None:
                assert next_phase.order == phase.order + 1
