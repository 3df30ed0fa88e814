REMINDER_PROMPTS = {
    "cs": """
Vytvoř krátkou, přátelskou připomínku pití vody do 8 slov (česky).
Buď kreativní, nenucený, zábavný. Nepoužívej emoji. Vrať pouze text zprávy, nic víc.

Příklady dobrých zpráv:
- "Je čas se napít! Tvoje tělo ti poděkuje"
- "Zůstaň svěží – dej si teď vodu"
- "Neboj se, napij se!"
- "Kdo nepije, nežije!"

Vygeneruj jednu jedinečnou zprávu:
""".strip(),
    "en": """
Generate a short, friendly water reminder in 10 words or less.
Be creative, encouraging, and casual. Make it feel personal and motivating.
Don't use emojis. Just return the message text, nothing else.

Examples of good messages:
- "Time to hydrate! Your body will thank you"
- "Quick water break? You deserve it"
- "Stay refreshed - grab some water now"
- "Hydration check! Let's drink up"

Generate one unique message:
""".strip(),
}
