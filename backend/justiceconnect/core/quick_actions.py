"""
Starter questions offered on an empty chat, one set per language.
"""

from typing import Dict, List

from ..models import Language, QuickAction

_ACTIONS: Dict[Language, List[QuickAction]] = {
    Language.ENGLISH: [
        QuickAction(label="Labor Rights", question="What are my rights as an employee in the Philippines?"),
        QuickAction(label="Property", question="How do I buy land or property in the Philippines?"),
        QuickAction(label="Family Law", question="What are the laws on annulment and legal separation?"),
        QuickAction(label="Small Claims", question="How do I file a small claims case?"),
        QuickAction(label="Traffic", question="What are the traffic laws and penalties?"),
        QuickAction(label="Documents", question="How do I get a birth certificate and other documents?"),
    ],
    Language.TAGALOG: [
        QuickAction(label="Karapatan sa Trabaho", question="Ano ang mga karapatan ko bilang manggagawa sa Pilipinas?"),
        QuickAction(label="Ari-arian", question="Paano ang proseso ng pagbili ng lupa at bahay?"),
        QuickAction(label="Pamilya", question="Ano ang batas tungkol sa annulment at legal separation?"),
        QuickAction(label="Small Claims", question="Paano mag-file ng small claims case?"),
        QuickAction(label="Trapiko", question="Ano ang mga batas sa trapiko at kaparusahan?"),
        QuickAction(label="Dokumento", question="Paano kumuha ng birth certificate at iba pang dokumento?"),
    ],
    Language.BISAYA: [
        QuickAction(label="Katungod sa Trabaho", question="Unsa ang akong mga katungod isip trabahador sa Pilipinas?"),
        QuickAction(label="Kabtangan", question="Unsaon pag-palit ug yuta ug balay?"),
        QuickAction(label="Pamilya", question="Unsa ang balaod bahin sa annulment ug legal separation?"),
        QuickAction(label="Small Claims", question="Unsaon pag-file ug small claims case?"),
        QuickAction(label="Trapiko", question="Unsa ang mga balaod sa trapiko ug silot?"),
        QuickAction(label="Dokumento", question="Unsaon pagkuha ug birth certificate ug uban pang dokumento?"),
    ],
}


def get_quick_actions(language: Language) -> List[QuickAction]:
    return list(_ACTIONS.get(language, _ACTIONS[Language.ENGLISH]))
