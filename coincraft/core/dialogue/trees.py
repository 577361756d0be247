"""기본 NPC 대화 그래프

- guide: 게임 안내 (Strong Adventurer)
- wise_lady: 재무 지식 강의, 공유 메뉴로 돌아오는 순환 구조
- businessman: 퀴즈 출제. 퀴즈 선택지는 StartQuiz 효과 + target None
"""

from coincraft.core.dialogue.effects import StartQuiz
from coincraft.core.dialogue.graph import DialogueGraph, DialogueGraphBuilder
from coincraft.core.quiz.bank import BASIC, CREDIT, INVESTMENT, KIDS, PLANNING

GUIDE = "Strong Adventurer"
WISE_LADY = "Wise Lady"
BUSINESSMAN = "Smart Businessman"


def build_guide_conversation() -> DialogueGraph:
    b = DialogueGraphBuilder(GUIDE)

    b.node(
        "welcome",
        "Greetings, fellow adventurer! I'm your guide to this financial literacy "
        "world. Welcome to your journey of learning about money management!",
        mood="happy",
    )
    b.node("menu", "How can I help you today, brave adventurer?")
    b.node(
        "controls",
        "Here is how your adventure works:\n"
        "- Walk up to an NPC and talk to them\n"
        "- Each NPC has unique knowledge to share\n"
        "- Answer questions correctly to earn SmartCoins\n"
        "- Wrong answers will cost you coins!",
        keywords=("controls", "help"),
    )
    b.node(
        "npcs",
        "Let me introduce you to the others:\n"
        "WISE LADY: she holds the secrets of budgeting, saving and investing.\n"
        "SMART BUSINESSMAN: he tests your knowledge with quizzes. "
        "Right answers earn coins, wrong answers cost coins!",
        keywords=("npc", "introduction"),
    )
    b.node(
        "tips",
        "Some tips for your adventure:\n"
        "- Save your coins for important things\n"
        "- Think carefully before answering\n"
        "- Learn from your mistakes, every expert was once a beginner\n"
        "You have {balance} SmartCoins right now.",
        keywords=("tips", "saving"),
    )
    b.node(
        "goodbye",
        "Good luck on your journey, brave adventurer! Take your time, ask "
        "questions, and learn at your own pace.",
        mood="happy",
    )

    b.option("welcome", "Tell me about the game controls", "controls")
    b.option("welcome", "Introduce me to other NPCs", "npcs")
    b.option("welcome", "Give me some adventure tips", "tips")
    b.option("welcome", "Thank you, I'll explore now", "goodbye")

    b.option("menu", "How do I play this game?", "controls")
    b.option("menu", "Who are the other NPCs?", "npcs")
    b.option("menu", "Any tips for my adventure?", "tips")
    b.option("menu", "I'm ready to explore!", "goodbye")

    b.option("controls", "Tell me about other NPCs", "npcs")
    b.option("controls", "Give me some tips", "tips")
    b.option("controls", "I have another question", "menu")
    b.option("controls", "I understand, thank you", "goodbye")

    b.option("npcs", "Tell me about game controls", "controls")
    b.option("npcs", "Give me some tips", "tips")
    b.option("npcs", "I have another question", "menu")
    b.option("npcs", "I'm ready to explore!", "goodbye")

    b.option("tips", "Tell me about controls", "controls")
    b.option("tips", "Tell me about NPCs", "npcs")
    b.option("tips", "I have another question", "menu")
    b.option("tips", "I'm ready to explore!", "goodbye")

    b.option("goodbye", "Goodbye!", None, valence="positive")
    return b.build("welcome")


# (node_id, 메뉴 라벨, 본문, 심화 본문)
_LESSONS: tuple[tuple[str, str, str, str], ...] = (
    (
        "budgeting",
        "Budgeting basics",
        "Ah, budgeting, the foundation of financial wisdom!\n"
        "THE 50/30/20 RULE:\n"
        "- 50% for needs (food, home, bills)\n"
        "- 30% for wants (games, treats, hobbies)\n"
        "- 20% for savings\n"
        "Track every expense for a month and always pay yourself first.",
        "Advanced budgeting:\n"
        "- Zero-based budgeting: every coin has a job\n"
        "- Plan for irregular and yearly expenses\n"
        "- Don't be too strict, or the budget won't last\n"
        "- Set up automatic transfers to savings",
    ),
    (
        "saving",
        "Saving strategies",
        "Saving is the path to financial freedom, young one.\n"
        "EMERGENCY FUND first: enough to cover a few months of needs.\n"
        "Pay yourself first, wait a day before big purchases, and save "
        "the gifts and bonuses you receive.",
        "Advanced saving:\n"
        "1. Emergency fund\n"
        "2. Long-term savings\n"
        "3. Specific goals (a bike, a trip)\n"
        "Name your savings jars, picture your goals and celebrate small wins.",
    ),
    (
        "investing",
        "Investment wisdom",
        "Investing lets your money grow while you sleep.\n"
        "COMPOUND INTEREST: you earn interest on your interest too.\n"
        "DIVERSIFICATION: don't put all your eggs in one basket.\n"
        "Start early and be patient.",
        "Advanced investing:\n"
        "- Stocks are pieces of a company; bonds are loans you make\n"
        "- Index funds spread your money across many companies\n"
        "- Higher reward usually means higher risk\n"
        "- The rule of 72 estimates how long money takes to double",
    ),
    (
        "credit",
        "Credit knowledge",
        "Credit is borrowed trust.\n"
        "A credit score (300 to 850) shows how well you repay.\n"
        "Pay on time, borrow only what you can repay, and keep balances low.",
        "Advanced credit:\n"
        "- Payment history matters most for your score\n"
        "- Using little of your limit helps your score\n"
        "- Check your credit report for mistakes\n"
        "- Interest makes unpaid balances grow quickly",
    ),
    (
        "goals",
        "Financial goal setting",
        "Every great journey begins with a goal.\n"
        "Make goals SMART: specific, measurable, achievable, relevant "
        "and time-bound. Write them down and check on them often.",
        "Advanced goal setting:\n"
        "- Split big goals into small steps\n"
        "- Short-term goals build momentum for long-term ones\n"
        "- Review your progress every month\n"
        "- Adjust the plan, not the dream",
    ),
)


def build_wise_lady_conversation() -> DialogueGraph:
    b = DialogueGraphBuilder(WISE_LADY)

    b.node(
        "welcome",
        "{greeting}\nI am the Wise Lady, keeper of financial knowledge. "
        "What aspect of financial literacy interests you most?",
        mood="content",
    )
    b.node("menu", "What aspect of financial wisdom would you like to explore?")
    b.node(
        "goodbye",
        "Remember, financial wisdom is not about having all the answers, but "
        "about asking the right questions. May prosperity follow your wise "
        "decisions!",
        mood="happy",
    )

    for node_id, label, text, advanced_text in _LESSONS:
        advanced_id = f"{node_id}_advanced"
        b.node(node_id, text, keywords=(node_id,))
        b.node(advanced_id, advanced_text, difficulty=2, keywords=(node_id, "advanced"))

        b.option("welcome", label, node_id)
        b.option("menu", label, node_id)

        b.option(node_id, f"Tell me more about advanced {node_id}", advanced_id)
        b.option(node_id, "I have other questions", "menu")
        b.option(node_id, "Thank you for your wisdom", "goodbye")
        b.option(advanced_id, "I have other questions", "menu")
        b.option(advanced_id, "Thank you for your wisdom", "goodbye")

    b.option("welcome", "I have other questions", "menu")
    b.option("menu", "Thank you for your wisdom", "goodbye")
    b.option("goodbye", "Farewell!", None, valence="positive")
    return b.build("welcome")


# (라벨, 카테고리, 난이도 상한, 문항 수)
QUIZ_CHOICES: tuple[tuple[str, str, int, int], ...] = (
    ("Beginner quiz: money basics", BASIC, 1, 5),
    ("Kids quiz: saving and spending", KIDS, 2, 5),
    ("Intermediate quiz: investing", INVESTMENT, 2, 5),
    ("Challenge quiz: credit", CREDIT, 3, 3),
    ("Expert quiz: financial planning", PLANNING, 3, 2),
)


def build_businessman_conversation() -> DialogueGraph:
    b = DialogueGraphBuilder(BUSINESSMAN)

    b.node(
        "welcome",
        "Hello there! I'm the Smart Businessman, and I test financial knowledge. "
        "The best way to learn is through practice and challenge. Are you ready "
        "to test your financial literacy skills?",
        mood="excited",
    )
    b.node(
        "quiz_intro",
        "Excellent! Here's how it works:\n"
        "- Correct answers earn coins, harder quizzes pay more\n"
        "- Wrong answers cost coins (never below zero)\n"
        "- Answer several in a row for a streak bonus\n"
        "- Finish strong for a completion bonus\n"
        "Which quiz would you like?",
    )
    b.node(
        "progress",
        "Let me check my books...\n"
        "Balance: {balance} SmartCoins\n"
        "Quiz score: {quiz_score}%\n"
        "Coins earned: {coins_earned}  Coins lost: {coins_lost}",
        keywords=("progress", "ledger"),
    )
    b.node(
        "goodbye",
        "No problem. Come back when you're ready to put your knowledge to work!",
    )

    b.option("welcome", "Yes, I'm ready!", "quiz_intro", valence="positive")
    b.option("welcome", "How am I doing so far?", "progress")
    b.option("welcome", "Maybe later", "goodbye", valence="negative")

    for label, category, ceiling, count in QUIZ_CHOICES:
        b.option(
            "quiz_intro",
            label,
            None,
            on_select=(StartQuiz(category, ceiling, count),),
            tooltip=f"Up to difficulty {ceiling}, {count} questions",
        )
    b.option("quiz_intro", "Maybe later", "goodbye", valence="negative")

    b.option("progress", "Let's do a quiz", "quiz_intro", valence="positive")
    b.option("progress", "Maybe later", "goodbye")

    b.option("goodbye", "See you!", None)
    return b.build("welcome")
