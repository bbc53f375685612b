"""
Word Transformer Module
Inflects English verbs and nouns to match requested grammatical features.
"""
import re
from typing import Optional, Tuple

from pattern_core import VerbFeatures


class EnglishInflector:
    """Rule-based English verb conjugation and noun pluralization."""

    # Irregular verbs: base -> (past, past participle)
    IRREGULAR_VERBS = {
        'be': ('was', 'been'),
        'go': ('went', 'gone'),
        'have': ('had', 'had'),
        'do': ('did', 'done'),
        'make': ('made', 'made'),
        'take': ('took', 'taken'),
        'bring': ('brought', 'brought'),
        'come': ('came', 'come'),
        'get': ('got', 'gotten'),
        'eat': ('ate', 'eaten'),
        'drink': ('drank', 'drunk'),
        'see': ('saw', 'seen'),
        'meet': ('met', 'met'),
        'buy': ('bought', 'bought'),
        'read': ('read', 'read'),
        'write': ('wrote', 'written'),
        'run': ('ran', 'run'),
        'sit': ('sat', 'sat'),
        'leave': ('left', 'left'),
        'find': ('found', 'found'),
        'give': ('gave', 'given'),
        'know': ('knew', 'known'),
        'think': ('thought', 'thought'),
        'say': ('said', 'said'),
        'tell': ('told', 'told'),
        'sleep': ('slept', 'slept'),
        'teach': ('taught', 'taught'),
        'speak': ('spoke', 'spoken'),
        'send': ('sent', 'sent'),
        'drive': ('drove', 'driven'),
        'pay': ('paid', 'paid'),
        'put': ('put', 'put'),
        'keep': ('kept', 'kept'),
        'begin': ('began', 'begun'),
        'swim': ('swam', 'swum'),
        'forget': ('forgot', 'forgotten'),
        'understand': ('understood', 'understood'),
    }

    # Present third-person singular forms the suffix rules would get wrong
    IRREGULAR_THIRD_PERSON = {
        'be': 'is',
        'have': 'has',
        'do': 'does',
        'go': 'goes',
    }

    IRREGULAR_NOUNS = {
        'tooth': 'teeth',
        'foot': 'feet',
        'goose': 'geese',
        'man': 'men',
        'woman': 'women',
        'child': 'children',
        'mouse': 'mice',
        'person': 'people',
    }
    INVARIABLE_NOUNS = {'sheep', 'deer', 'fish', 'species', 'aircraft'}
    # -f / -fe nouns that simply take -s
    F_PLURAL_EXCEPTIONS = {'roof', 'chief', 'belief', 'chef', 'proof', 'cafe', 'safe', 'giraffe'}

    # Words whose spelling hides their first sound
    VOWEL_SOUND_WORDS = ('hour', 'honest', 'honor', 'honour', 'heir')
    CONSONANT_SOUND_PREFIXES = ('uni', 'use', 'usu', 'uti', 'one', 'once', 'euro', 'ewe')

    VOWELS = 'aeiou'
    SIBILANT_ENDINGS = ('s', 'x', 'z', 'ch', 'sh')
    # Single-syllable consonant-vowel-consonant stems double their final consonant
    SHORT_CVC = re.compile(r'^[^aeiou]*[aeiou][^aeiouwxy]$')

    @staticmethod
    def _split_head(lemma: str) -> Tuple[str, str]:
        """Split a phrasal lemma into its head verb and the remaining particle(s)."""
        parts = lemma.strip().split(' ', 1)
        head = parts[0].lower()
        rest = f" {parts[1]}" if len(parts) > 1 else ''
        return head, rest

    def _consonant_before_y(self, word: str) -> bool:
        return len(word) > 1 and word.endswith('y') and word[-2] not in self.VOWELS

    def third_person(self, verb: str) -> str:
        """Present tense third-person singular form of a base verb."""
        if verb in self.IRREGULAR_THIRD_PERSON:
            return self.IRREGULAR_THIRD_PERSON[verb]
        if verb.endswith(self.SIBILANT_ENDINGS):
            return verb + 'es'
        if self._consonant_before_y(verb):
            return verb[:-1] + 'ies'
        return verb + 's'

    def past(self, verb: str) -> str:
        """Simple past form of a base verb."""
        if verb in self.IRREGULAR_VERBS:
            return self.IRREGULAR_VERBS[verb][0]
        if verb.endswith('e'):
            return verb + 'd'
        if self._consonant_before_y(verb):
            return verb[:-1] + 'ied'
        if self.SHORT_CVC.match(verb):
            return verb + verb[-1] + 'ed'
        return verb + 'ed'

    def past_participle(self, verb: str) -> str:
        if verb in self.IRREGULAR_VERBS:
            return self.IRREGULAR_VERBS[verb][1]
        return self.past(verb)

    def present_participle(self, verb: str) -> str:
        """The -ing form of a base verb."""
        if verb.endswith('ie'):
            return verb[:-2] + 'ying'
        if verb.endswith('e') and not verb.endswith('ee') and len(verb) > 2:
            return verb[:-1] + 'ing'
        if self.SHORT_CVC.match(verb):
            return verb + verb[-1] + 'ing'
        return verb + 'ing'

    @staticmethod
    def _be_form(tense: str, features: VerbFeatures) -> str:
        singular = features.number != 'plural'
        if tense == 'past':
            return 'was' if singular and features.person in ('first', 'third') else 'were'
        if singular and features.person == 'first':
            return 'am'
        if features.is_third_singular:
            return 'is'
        return 'are'

    def inflect(self, lemma: str, features: Optional[VerbFeatures] = None) -> str:
        """
        Conjugate a verb lemma.

        Args:
            lemma: Base form ("go", "pick up")
            features: Requested tense/aspect/polarity/person/number

        Returns:
            The conjugated verb phrase, e.g. "goes", "did not go", "have made"
        """
        if not lemma:
            return lemma
        features = features or VerbFeatures()
        tense = features.tense or 'present'
        aspect = features.aspect or 'simple'
        negative = features.is_negative
        head, rest = self._split_head(lemma)

        if aspect == 'progressive':
            if tense == 'future':
                aux = 'will not be' if negative else 'will be'
            else:
                aux = self._be_form(tense, features) + (' not' if negative else '')
            return f"{aux} {self.present_participle(head)}{rest}"

        if aspect == 'perfect':
            if tense == 'future':
                aux = 'will not have' if negative else 'will have'
            else:
                if tense == 'past':
                    aux = 'had'
                else:
                    aux = 'has' if features.is_third_singular else 'have'
                if negative:
                    aux += ' not'
            return f"{aux} {self.past_participle(head)}{rest}"

        if tense == 'future':
            return f"{'will not' if negative else 'will'} {head}{rest}"

        if head == 'be':
            form = self._be_form(tense, features)
            return f"{form} not{rest}" if negative else f"{form}{rest}"

        if negative:
            if tense == 'past':
                aux = 'did not'
            else:
                aux = 'does not' if features.is_third_singular else 'do not'
            return f"{aux} {head}{rest}"

        if tense == 'past':
            return self.past(head) + rest
        if features.is_third_singular:
            return self.third_person(head) + rest
        return head + rest

    def pluralize(self, noun: str, irregular_plural: Optional[str] = None) -> str:
        """
        Plural form of a noun.

        Args:
            noun: Singular noun (multi-word nouns pluralize their last word)
            irregular_plural: Lexeme-level override, used verbatim when given

        Returns:
            The plural noun
        """
        if irregular_plural:
            return irregular_plural
        if not noun:
            return noun
        prefix, _, last = noun.rpartition(' ')
        prefix = f"{prefix} " if prefix else ''
        word = last.lower()

        if word in self.IRREGULAR_NOUNS:
            return prefix + self.IRREGULAR_NOUNS[word]
        if word in self.INVARIABLE_NOUNS:
            return prefix + last
        if word.endswith(self.SIBILANT_ENDINGS):
            return prefix + last + 'es'
        if self._consonant_before_y(word):
            return prefix + last[:-1] + 'ies'
        if word not in self.F_PLURAL_EXCEPTIONS:
            if word.endswith('fe'):
                return prefix + last[:-2] + 'ves'
            if word.endswith('f') and not word.endswith('ff'):
                return prefix + last[:-1] + 'ves'
        return prefix + last + 's'

    def article_for(self, word: str) -> str:
        """Indefinite article ('a' or 'an') by the word's first sound."""
        lowered = word.lower()
        if lowered.startswith(self.VOWEL_SOUND_WORDS):
            return 'an'
        if lowered.startswith(self.CONSONANT_SOUND_PREFIXES):
            return 'a'
        return 'an' if lowered[:1] in self.VOWELS else 'a'
