from bossfight.battle.actor import GameLedger, Hero
from bossfight.battle.context import HealthLedger, PlayerLike

def test_hero_is_player_like():
    assert isinstance(Hero(), PlayerLike)
    assert isinstance(GameLedger(), HealthLedger)

def test_hero_with_hp():
    hero = Hero.with_hp(30)
    assert hero.get_hp() == 30
    assert hero.health.max_hp == 100
    assert hero.is_alive()

def test_hero_dies_at_zero():
    hero = Hero.with_hp(10)
    assert hero.take_damage(25) == 10
    assert hero.get_hp() == 0
    assert not hero.is_alive()

def test_ledger_tracks_damage():
    ledger = GameLedger()
    ledger.take_damage(30)
    ledger.take_damage(0)
    ledger.take_damage(90)

    assert ledger.hp == 0
    assert ledger.damage_taken == 120
    assert ledger.hits_taken == 2
