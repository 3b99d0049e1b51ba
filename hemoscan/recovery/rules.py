"""
HemoScan - Таблиці правил плану відновлення

Ключ правила - підрядок мітки класифікації (без урахування регістру).
Мітка може бути вільним текстом від віддаленого AI, тому тут
підрядки, а не точна відповідність AnemiaType.
"""

from typing import List

from hemoscan.config import RecoveryConfig


IRON_DEFICIENCY = "iron deficiency"
VITAMIN_B12 = "b12"
CHRONIC_DISEASE = "chronic disease"


IRON_RECOMMENDATIONS = [
    "Take iron supplements (325mg ferrous sulfate daily)",
    "Schedule follow-up blood test in 4-6 weeks",
    "Consult with a hematologist if symptoms persist",
    "Monitor for side effects: constipation, dark stools",
]

B12_RECOMMENDATIONS = [
    "Start Vitamin B12 supplementation (1000mcg daily)",
    "Consider folate supplementation (400-800mcg daily)",
    "Schedule follow-up in 8-12 weeks",
    "Evaluate for absorption issues if vegetarian/vegan",
]

CHRONIC_DISEASE_RECOMMENDATIONS = [
    "Address underlying chronic condition",
    "Regular monitoring every 2-3 months",
    "Maintain adequate protein intake",
]

URGENT_RECOMMENDATIONS = [
    "URGENT: Consult healthcare provider immediately",
    "Avoid strenuous physical activity",
]

IRON_DIET = [
    "Red meat (beef, lamb) 2-3 times per week",
    "Leafy greens (spinach, kale) with vitamin C",
    "Legumes (lentils, beans, chickpeas)",
    "Fortified cereals and bread",
    "Avoid tea/coffee with meals (inhibits iron absorption)",
    "Pair iron-rich foods with vitamin C sources",
]

B12_DIET = [
    "Fish (salmon, tuna, sardines)",
    "Eggs and dairy products",
    "Fortified nutritional yeast",
    "Meat and poultry",
    "B12-fortified plant milk if vegetarian",
]

GENERAL_DIET = [
    "Balanced diet with variety of nutrients",
    "Adequate protein intake",
    "Fresh fruits and vegetables",
    "Whole grains",
]

BASE_LIFESTYLE = [
    "Adequate sleep (7-9 hours per night)",
    "Stress management techniques",
    "Regular light exercise as tolerated",
]

PACING_LIFESTYLE = [
    "Avoid high-altitude activities temporarily",
    "Take breaks during physical activities",
]

CAST_IRON_LIFESTYLE = "Cook in cast iron cookware to boost iron intake"


def _matches(classification: str, key: str) -> bool:
    return key in classification.lower()


def recommendations_for(classification: str, hemoglobin: float, config: RecoveryConfig) -> List[str]:
    """Рекомендації: перше правило, що збіглося, плюс термінові пункти при низькому Hb"""
    if _matches(classification, IRON_DEFICIENCY):
        items = list(IRON_RECOMMENDATIONS)
    elif _matches(classification, VITAMIN_B12):
        items = list(B12_RECOMMENDATIONS)
    elif _matches(classification, CHRONIC_DISEASE):
        items = list(CHRONIC_DISEASE_RECOMMENDATIONS)
    else:
        items = []

    if hemoglobin < config.urgent_hemoglobin:
        items.extend(URGENT_RECOMMENDATIONS)
    return items


def dietary_suggestions_for(classification: str) -> List[str]:
    if _matches(classification, IRON_DEFICIENCY):
        return list(IRON_DIET)
    if _matches(classification, VITAMIN_B12):
        return list(B12_DIET)
    return list(GENERAL_DIET)


def lifestyle_changes_for(classification: str, hemoglobin: float, config: RecoveryConfig) -> List[str]:
    items = list(BASE_LIFESTYLE)
    if hemoglobin < config.pacing_hemoglobin:
        items.extend(PACING_LIFESTYLE)
    if _matches(classification, IRON_DEFICIENCY):
        items.append(CAST_IRON_LIFESTYLE)
    return items
