"""
Line type rules for EverQuest log lines.

Each rule pairs a regular expression with a handler that turns the captured
groups into a flat field mapping. Rules are tried in the order of
``LINE_TYPE_RULES`` and the first full match wins, so the order below is
significant:

- MOB_HITS_YOU sits before MELEE_DAMAGE, which would otherwise read "YOU"
  as the attackee.
- MELEE_DAMAGE carries a negative lookahead so damage shield lines
  ("... was hit by non-melee for N points of damage.") fall through.
- Every tell, shout and out-of-character line sits before OTHER_SAYS, whose
  leading ``(.+?)`` would swallow quoted speech containing "says".
- PLAYER_LISTING is last.

Handlers can be called with no arguments and still return every declared
field, so a rule's record shape never depends on what was captured.
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Pattern, Tuple

from .currency import DENOMINATIONS, parse_currency

__all__ = ['LineTypeRule', 'LINE_TYPE_RULES', 'MELEE_VERBS']

MELEE_VERBS = ('slash', 'hit', 'kick', 'pierce', 'bash', 'punch', 'crush', 'bite',
               'maul', 'claw', 'sting', 'gore', 'smash')

_VERBS = '|'.join(MELEE_VERBS)

MONEY_FIELDS = DENOMINATIONS


@dataclass(frozen=True)
class LineTypeRule:
    """A single recognizable line shape."""
    name: str
    pattern: Pattern
    handler: Callable[..., Dict[str, Any]]
    fields: Tuple[str, ...]
    example: str = ''

    def match(self, content: str) -> Optional[Dict[str, Any]]:
        """Return the extracted fields if the whole content matches, else None."""
        match = self.pattern.fullmatch(content)
        if match is None:
            return None
        return self.handler(*match.groups())


def _text(value: Optional[str]) -> str:
    return value if value is not None else ''


def _ucfirst(value: Optional[str]) -> str:
    value = _text(value)
    return value[:1].upper() + value[1:]


def _money(text: Optional[str]) -> Dict[str, int]:
    return parse_currency(text).as_dict()


# --- Melee ---

def _mob_hits_you(attacker=None, attack=None, amount=None):
    return {
        'attacker': _text(attacker),
        'attack': _text(attack),
        'amount': _text(amount),
    }


def _melee_damage(attacker=None, attack=None, attackee=None, amount=None):
    return {
        'attacker': _ucfirst(attacker),
        'attack': _text(attack),
        'attackee': _ucfirst(attackee),
        'amount': _text(amount),
    }


def _mob_repels_hit(attack=None, attackee=None, repel=None):
    repel = _text(repel)
    if repel == 'parrie':
        repel = 'parry'
    return {
        'attack': _text(attack),
        'attackee': _ucfirst(attackee),
        'repel': repel,
    }


def _you_miss_mob(attack=None, attackee=None):
    return {
        'attack': _text(attack),
        'attackee': _ucfirst(attackee),
    }


def _mob_misses_you(attacker=None, attack=None):
    return {
        'attacker': _text(attacker),
        'attack': _text(attack),
    }


def _you_repel_hit(attacker=None, attack=None, repel=None):
    return {
        'attacker': _text(attacker),
        'attack': _text(attack),
        'repel': _text(repel),
    }


# --- Spell and other damage ---

def _damage_shield(attacker=None, amount=None):
    return {
        'attacker': _ucfirst(attacker),
        'amount': _text(amount),
    }


def _direct_damage(attacker=None, attackee=None, amount=None):
    return {
        'attacker': _text(attacker),
        'attackee': _ucfirst(attackee),
        'amount': _text(amount),
    }


def _damage_over_time(attackee=None, amount=None, spell=None):
    return {
        'attackee': _text(attackee),
        'amount': _text(amount),
        'spell': _text(spell),
    }


def _critical_score(attacker=None, kind=None, amount=None):
    return {
        'attacker': _text(attacker),
        'type': _text(kind),
        'amount': _text(amount),
    }


# --- Deaths ---

def _slain_by_you(slayee=None):
    return {'slayee': _text(slayee)}


def _you_slain(slayer=None):
    return {'slayer': _ucfirst(slayer)}


def _slain_by_other(slayee=None, slayer=None):
    return {
        'slayee': _ucfirst(slayee),
        'slayer': _text(slayer),
    }


def _player_healed(healer=None, healee=None, amount=None):
    return {
        'healer': _text(healer),
        'healee': _text(healee),
        'amount': _text(amount),
    }


# --- Progress ---

def _faction_hit(faction_group=None, faction_change=None):
    return {
        'faction_group': _text(faction_group),
        'faction_change': _text(faction_change),
    }


def _skill_up(skill_upped=None, skill_value=None):
    return {
        'skill_upped': _text(skill_upped),
        'skill_value': _text(skill_value),
    }


def _gain_experience(gainer=None):
    return {'gainer': _text(gainer)}


def _amount_only(amount=None):
    return {'amount': _text(amount)}


# --- Spells ---

def _spell_only(spell=None):
    return {'spell': _text(spell)}


def _other_casts(caster=None):
    return {'caster': _ucfirst(caster)}


def _no_fields():
    return {}


# --- Money and items ---

def _money_only(money=None):
    return _money(money)


def _sell_item(money=None, merchant=None, item=None):
    fields = _money(money)
    fields.update({
        'merchant': _text(merchant),
        'item': _text(item),
    })
    return fields


def _buy_item(money=None, merchant=None):
    fields = _money(money)
    fields['merchant'] = _ucfirst(merchant)
    return fields


def _loot_item(looter=None, item=None):
    return {
        'looter': _text(looter),
        'item': _text(item),
    }


# --- Movement ---

def _entered_zone(zone=None):
    return {'zone': _text(zone)}


def _location(location_coords=None):
    coords = [c for c in re.split(r'[\s,]+', _text(location_coords)) if c]
    coords += [''] * (3 - len(coords))
    return {
        'coord_1': coords[0],
        'coord_2': coords[1],
        'coord_3': coords[2],
    }


def _tracking_mob(trackee=None):
    return {'trackee': _ucfirst(trackee)}


# --- Chat ---

def _spoken_only(spoken=None):
    return {'spoken': _text(spoken)}


def _speaker_spoken(speaker=None, spoken=None):
    return {
        'speaker': _text(speaker),
        'spoken': _text(spoken),
    }


def _speakee_spoken(speakee=None, spoken=None):
    return {
        'speakee': _text(speakee),
        'spoken': _text(spoken),
    }


# --- /who output ---

def _player_listing(afk=None, linkdead=None, anonymous=None, level=None, player_class=None,
                    name=None, race=None, guild=None, zone=None, lfg=None):
    return {
        'afk': _text(afk),
        'linkdead': _text(linkdead),
        'anonymous': _text(anonymous),
        'level': _text(level),
        'class': _text(player_class),
        'name': _text(name),
        'race': _text(race),
        'guild': _text(guild),
        'zone': _text(zone),
        'lfg': _text(lfg),
    }


def _rule(name: str, pattern: str, handler: Callable[..., Dict[str, Any]],
          fields: Tuple[str, ...], example: str) -> LineTypeRule:
    return LineTypeRule(name, re.compile(pattern), handler, tuple(fields), example)


LINE_TYPE_RULES: Tuple[LineTypeRule, ...] = (
    _rule('MOB_HITS_YOU',
          rf"(.+?) ({_VERBS})(?:s|es) YOU for (\d+) points? of damage\.",
          _mob_hits_you, ('attacker', 'attack', 'amount'),
          "A Bloodguard crypt sentry hits YOU for 161 points of damage."),
    _rule('MELEE_DAMAGE',
          rf"(.+?) ({_VERBS})(?:s|es)? (?!by non-melee)(.+?) for (\d+) points? of damage\.",
          _melee_damage, ('attacker', 'attack', 'attackee', 'amount'),
          "You slash a Bloodguard crypt sentry for 88 points of damage."),
    _rule('MOB_REPELS_HIT',
          r"You try to (\w+) (.+?), but \2 (\w+)s!",
          _mob_repels_hit, ('attack', 'attackee', 'repel'),
          "You try to slash a Bloodguard crypt sentry, but a Bloodguard crypt sentry ripostes!"),
    _rule('YOU_MISS_MOB',
          r"You try to (\w+) (.+?), but miss!",
          _you_miss_mob, ('attack', 'attackee'),
          "You try to kick a Bloodguard crypt sentry, but miss!"),
    _rule('MOB_MISSES_YOU',
          r"(.+?) tries to (\w+) YOU, but misses!",
          _mob_misses_you, ('attacker', 'attack'),
          "A Bloodguard crypt sentry tries to hit YOU, but misses!"),
    _rule('YOU_REPEL_HIT',
          r"(.+?) tries to (\w+) YOU, but YOU (\w+)!",
          _you_repel_hit, ('attacker', 'attack', 'repel'),
          "A Bloodguard crypt sentry tries to hit YOU, but YOU parry!"),
    _rule('DAMAGE_SHIELD',
          r"(.+?) was hit by non-melee for (\d+) points? of damage\.",
          _damage_shield, ('attacker', 'amount'),
          "a Bloodguard crypt sentry was hit by non-melee for 8 points of damage."),
    _rule('DIRECT_DAMAGE',
          r"(.+?) hit (.+?) for (\d+) points? of non-melee damage\.",
          _direct_damage, ('attacker', 'attackee', 'amount'),
          "Soandso hit a Bloodguard crypt sentry for 300 points of non-melee damage."),
    _rule('DAMAGE_OVER_TIME',
          r"(.+?) has taken (\d+) damage from your (.+?)\.",
          _damage_over_time, ('attackee', 'amount', 'spell'),
          "A Bloodguard crypt sentry has taken 3 damage from your Flame Lick."),
    _rule('CRITICAL_SCORE',
          r"(\w+) scores a critical (hit|blast)! \((\d+)\)",
          _critical_score, ('attacker', 'type', 'amount'),
          "Soandso scores a critical hit! (126)"),
    _rule('SLAIN_BY_YOU',
          r"You have slain (.+?)!",
          _slain_by_you, ('slayee',),
          "You have slain a Bloodguard crypt sentry!"),
    _rule('YOU_SLAIN',
          r"You have been slain by (.+?)!",
          _you_slain, ('slayer',),
          "You have been slain by a Bloodguard crypt sentry!"),
    _rule('SLAIN_BY_OTHER',
          r"(.+?) has been slain by (.+?)!",
          _slain_by_other, ('slayee', 'slayer'),
          "a Bloodguard crypt sentry has been slain by Soandso!"),
    _rule('PLAYER_HEALED',
          r"(\w+) (?:have|has) healed (\w+) for (\d+) points? of damage\.",
          _player_healed, ('healer', 'healee', 'amount'),
          "Soandso has healed you for 456 points of damage."),
    _rule('FACTION_HIT',
          r"Your faction standing with (.+?) got (better|worse)\.",
          _faction_hit, ('faction_group', 'faction_change'),
          "Your faction standing with Loyals got worse."),
    _rule('SKILL_UP',
          r"You have become better at (.+?)! \((\d+)\)",
          _skill_up, ('skill_upped', 'skill_value'),
          "You have become better at Abjuration! (222)"),
    _rule('GAIN_EXPERIENCE',
          r"You gain (?:(party|raid) )?experience!!",
          _gain_experience, ('gainer',),
          "You gain party experience!!"),
    _rule('WIN_ADVENTURE',
          r"You have successfully completed your adventure\.  You received (\d+) adventure points\.  "
          r"You have \d+ minutes to exit this zone\.",
          _amount_only, ('amount',),
          "You have successfully completed your adventure.  You received 22 adventure points.  "
          "You have 30 minutes to exit this zone."),
    _rule('SPEND_ADVENTURE_POINTS',
          r"You have spent (\d+) adventure points?\.",
          _amount_only, ('amount',),
          "You have spent 40 adventure points."),
    _rule('YOU_CAST',
          r"You begin casting (.+?)\.",
          _spell_only, ('spell',),
          "You begin casting Ensnaring Roots."),
    _rule('OTHER_CASTS',
          r"(.+?) begins to cast a spell\.",
          _other_casts, ('caster',),
          "Soandso begins to cast a spell."),
    _rule('YOUR_SPELL_RESISTED',
          r"Your target resisted the (.+?) spell\.",
          _spell_only, ('spell',),
          "Your target resisted the Ensnaring Roots spell."),
    _rule('FORGET_SPELL',
          r"You forget (.+?)\.",
          _spell_only, ('spell',),
          "You forget Ensnaring Roots."),
    _rule('MEMORIZE_SPELL',
          r"You have finished memorizing (.+?)\.",
          _spell_only, ('spell',),
          "You have finished memorizing Ensnaring Roots."),
    _rule('YOU_FIZZLE',
          r"Your spell fizzles!",
          _no_fields, (),
          "Your spell fizzles!"),
    _rule('YOUR_SPELL_WEARS_OFF',
          r"Your (.+?) spell has worn off\.",
          _spell_only, ('spell',),
          "Your Flame Lick spell has worn off."),
    _rule('CORPSE_MONEY',
          r"You receive (.+?) from the corpse\.",
          _money_only, MONEY_FIELDS,
          "You receive 67 platinum, 16 gold, 20 silver and 36 copper from the corpse."),
    _rule('SPLIT_MONEY',
          r"You receive (.+?) as your split\.",
          _money_only, MONEY_FIELDS,
          "You receive 163 platinum, 30 gold, 25 silver and 33 copper as your split."),
    _rule('SELL_ITEM',
          r"You receive (.+?) from (.+?) for the (.+?)\(s\)\.",
          _sell_item, MONEY_FIELDS + ('merchant', 'item'),
          "You receive 120 platinum from Magus Delin for the Fire Emerald Ring(s)."),
    _rule('BUY_ITEM',
          r"You give (.+?) to (.+?)\.",
          _buy_item, MONEY_FIELDS + ('merchant',),
          "You give 1 gold 2 silver 5 copper to Cavalier Aodus."),
    _rule('LOOT_ITEM',
          r"--(\S+) (?:has|have) looted an? (.+?)\.--",
          _loot_item, ('looter', 'item'),
          "--You have looted a Flawed Green Shard of Might.--"),
    _rule('ENTERED_ZONE',
          r"You have entered (.+?)\.",
          _entered_zone, ('zone',),
          "You have entered The Greater Faydark."),
    _rule('LOCATION',
          r"Your Location is (.+?)",
          _location, ('coord_1', 'coord_2', 'coord_3'),
          "Your Location is -63.20, 3846.55, -42.76"),
    _rule('TRACKING_MOB',
          r"You begin tracking (.+?)\.",
          _tracking_mob, ('trackee',),
          "You begin tracking a Bloodguard crypt sentry."),
    _rule('YOU_TELL_OTHER',
          r"You told (\w+), '(.+)'",
          _speakee_spoken, ('speakee', 'spoken'),
          "You told Soandso, 'lol, i was waiting for that =)'"),
    _rule('OTHER_TELLS_YOU',
          r"(\w+) tells you, '(.+)'",
          _speaker_spoken, ('speaker', 'spoken'),
          "Soandso tells you, 'hows the adv?'"),
    _rule('YOU_TELL_GROUP',
          r"You tell your party, '(.+)'",
          _spoken_only, ('spoken',),
          "You tell your party, 'will keep an eye out'"),
    _rule('OTHER_TELLS_GROUP',
          r"(\w+) tells the group, '(.+)'",
          _speaker_spoken, ('speaker', 'spoken'),
          "Soandso tells the group, 'Didnt know that, thanks info'"),
    _rule('YOU_SHOUT',
          r"You shout, '(.+)'",
          _spoken_only, ('spoken',),
          "You shout, 'train to zone'"),
    _rule('OTHER_SHOUTS',
          r"(\w+) shouts, '(.+)'",
          _speaker_spoken, ('speaker', 'spoken'),
          "Soandso shouts, 'talk to vual stoutest'"),
    _rule('YOU_SAY_OOC',
          r"You say out of character, '(.+)'",
          _spoken_only, ('spoken',),
          "You say out of character, 'anyone selling bone chips?'"),
    _rule('SAYS_OOC',
          r"(\w+) says out of character, '(.+)'",
          _speaker_spoken, ('speaker', 'spoken'),
          "Soandso says out of character, 'Stop following me :oP'"),
    _rule('YOU_SAY',
          r"You say, '(.+)'",
          _spoken_only, ('spoken',),
          "You say, 'can you say /pet get lost'"),
    _rule('OTHER_SAYS',
          r"(.+?) says,? '(.+)'",
          _speaker_spoken, ('speaker', 'spoken'),
          "Soandso says, 'I aim to please :)'"),
    _rule('PLAYER_LISTING',
          r"(?:(AFK) )?(?:<(LINKDEAD)>)?\[(?:(ANONYMOUS)|(\d+) (.+?))\] (\w+)"
          r"(?: \((.+?)\))?(?: <(.+?)>)?(?: ZONE: (\w+))?(?: (LFG))?\s*",
          _player_listing,
          ('afk', 'linkdead', 'anonymous', 'level', 'class', 'name', 'race', 'guild', 'zone', 'lfg'),
          "[65 Deceiver] Soandso (Barbarian) <The Foobles> ZONE: potranquility"),
)
