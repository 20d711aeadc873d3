# heapsearch/problems/combat.py
# Turn-based wizard fight: the least total mana that still wins.
from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from ..core.problem import Problem


@dataclass(frozen=True)
class Boss:
    hp: int
    attack: int


@dataclass(frozen=True)
class Player:
    hp: int
    mana: int
    defense: int = 0


@dataclass(frozen=True)
class Effect:
    spell_name: str
    timer: int
    occur: Callable[["Combat"], "Combat"]


@dataclass(frozen=True)
class Combat:
    player: Player
    boss: Boss
    active_effects: Tuple[Effect, ...] = ()
    mana_spent: int = 0


@dataclass(frozen=True)
class Spell:
    name: str
    cost: int
    cast: Callable[[Combat], Combat]


# --- Spells -------------------------------------------------------------------

def _hit_boss(amount: int) -> Callable[[Combat], Combat]:
    def occur(before: Combat) -> Combat:
        return replace(before, boss=replace(before.boss, hp=before.boss.hp - amount))
    return occur


def _drain(before: Combat) -> Combat:
    return replace(
        before,
        boss=replace(before.boss, hp=before.boss.hp - 2),
        player=replace(before.player, hp=before.player.hp + 2),
    )


def _shield_tick(before: Combat) -> Combat:
    return replace(before, player=replace(before.player, defense=before.player.defense + 7))


def _recharge_tick(before: Combat) -> Combat:
    return replace(before, player=replace(before.player, mana=before.player.mana + 101))


def _start_effect(name: str, timer: int, occur: Callable[[Combat], Combat]) -> Callable[[Combat], Combat]:
    def cast(pre_cast: Combat) -> Combat:
        return replace(pre_cast, active_effects=pre_cast.active_effects + (Effect(name, timer, occur),))
    return cast


SPELLS: Tuple[Spell, ...] = (
    Spell("Magic Missile", 53, _hit_boss(4)),
    Spell("Drain", 73, _drain),
    Spell("Shield", 113, _start_effect("Shield", 6, _shield_tick)),
    Spell("Poison", 173, _start_effect("Poison", 6, _hit_boss(3))),
    Spell("Recharge", 229, _start_effect("Recharge", 5, _recharge_tick)),
)


# --- Input --------------------------------------------------------------------

def extract_stat(stat: str, line: Optional[str]) -> int:
    if not line:
        raise ValueError(f"No line for {stat}")
    prefix = f"{stat}: "
    if not line.startswith(prefix):
        raise ValueError(f"Expected {stat} but found {line!r}")
    try:
        return int(line[len(prefix):])
    except ValueError:
        raise ValueError(f"Expected a number for {stat} but found {line!r}") from None


def parse_boss(lines: Iterable[str]) -> Boss:
    rows = [line.strip() for line in lines if line.strip()]
    rows += [None] * (2 - len(rows))
    return Boss(hp=extract_stat("Hit Points", rows[0]), attack=extract_stat("Damage", rows[1]))


# --- Rules --------------------------------------------------------------------

def resolve_effects(before: Combat) -> Combat:
    """Apply every active effect once, then tick timers and drop expired ones."""
    state = replace(before, player=replace(before.player, defense=0))
    for effect in before.active_effects:
        state = effect.occur(state)
    return replace(
        state,
        active_effects=tuple(
            replace(effect, timer=effect.timer - 1)
            for effect in state.active_effects
            if effect.timer > 1
        ),
    )


def is_complete(combat: Combat) -> bool:
    return combat.boss.hp <= 0 or combat.player.hp <= 0


def simulate_round(pre_round: Combat, spell: Optional[Spell] = None) -> Combat:
    """
    One player turn and one boss turn. Not casting (or not affording the
    spell) loses the fight. Stops early as soon as either side is down.
    """
    pre_spell = resolve_effects(pre_round)
    if is_complete(pre_spell):
        return pre_spell
    if spell is None or spell.cost > pre_spell.player.mana:
        return replace(pre_spell, player=replace(pre_spell.player, hp=0))

    post_spell = spell.cast(replace(
        pre_spell,
        mana_spent=pre_spell.mana_spent + spell.cost,
        player=replace(pre_spell.player, mana=pre_spell.player.mana - spell.cost),
    ))
    if is_complete(post_spell):
        return post_spell

    pre_boss = resolve_effects(post_spell)
    if is_complete(pre_boss):
        return pre_boss

    damage = max(pre_boss.boss.attack - pre_boss.player.defense, 1)
    return replace(pre_boss, player=replace(pre_boss.player, hp=pre_boss.player.hp - damage))


# --- Problem definition -------------------------------------------------------

class CombatProblem(Problem):
    """
    States are Combat snapshots ordered by mana spent. Lost fights are still
    pushed and only thrown away when popped.
    """

    def __init__(self, boss: Boss, player: Player = Player(hp=50, mana=500), spells: Sequence[Spell] = SPELLS):
        self.boss = boss
        self.player = player
        self.spells = tuple(spells)

    def initial_states(self) -> List[Combat]:
        return [Combat(player=self.player, boss=self.boss)]

    def is_goal(self, s: Combat) -> bool:
        return s.boss.hp <= 0

    def is_dead(self, s: Combat) -> bool:
        return s.player.hp <= 0

    def castable(self, s: Combat) -> List[Spell]:
        # an effect on its last tick expires before the player casts
        active = {e.spell_name for e in s.active_effects if e.timer > 1}
        return [spell for spell in self.spells if spell.name not in active]

    def expand(self, s: Combat) -> List[Combat]:
        successors = [simulate_round(s, spell) for spell in self.castable(s)]
        successors.append(simulate_round(s))
        return successors

    def is_preferable(self, a: Combat, b: Combat) -> bool:
        return a.mana_spent < b.mana_spent

    def cost(self, s: Combat) -> float:
        return s.mana_spent


SAMPLE_BOSS = ["Hit Points: 13", "Damage: 8"]


def sample_combat_problem() -> CombatProblem:
    """Poison then Magic Missile wins for 226 mana."""
    return CombatProblem(parse_boss(SAMPLE_BOSS), Player(hp=10, mana=250))
