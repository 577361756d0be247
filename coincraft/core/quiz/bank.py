"""카테고리별 정적 문항 뱅크"""

from __future__ import annotations

from typing import Iterable

from coincraft.core.quiz.models import QuizQuestion


class QuestionBank:
    """카테고리 → 문항 목록. 생성 후 문항은 바뀌지 않는다."""

    def __init__(self, questions: Iterable[QuizQuestion] = ()) -> None:
        self._by_category: dict[str, list[QuizQuestion]] = {}
        for question in questions:
            self.add(question)

    def add(self, question: QuizQuestion) -> None:
        self._by_category.setdefault(question.category, []).append(question)

    @property
    def categories(self) -> list[str]:
        return list(self._by_category)

    def questions_for(self, category: str) -> list[QuizQuestion]:
        """카테고리 문항 사본. 없는 카테고리는 빈 리스트."""
        return list(self._by_category.get(category, []))

    def __len__(self) -> int:
        return sum(len(qs) for qs in self._by_category.values())


def _q(
    prompt: str,
    choices: list[str],
    correct_index: int,
    explanation: str,
    category: str,
    difficulty: int,
    keywords: list[str],
    hint: str,
) -> QuizQuestion:
    return QuizQuestion(
        prompt=prompt,
        choices=tuple(choices),
        correct_index=correct_index,
        explanation=explanation,
        category=category,
        difficulty=difficulty,
        keywords=frozenset(keywords),
        hint=hint,
    )


BASIC = "Basic Financial Concepts"
INVESTMENT = "Investment Knowledge"
CREDIT = "Credit Knowledge"
PLANNING = "Advanced Financial Planning"
KIDS = "Kids Money Basics"

DEFAULT_QUESTIONS: tuple[QuizQuestion, ...] = (
    # --- Basic Financial Concepts ---
    _q(
        "What is the primary purpose of an emergency fund?",
        [
            "To invest in stocks",
            "To cover unexpected expenses without going into debt",
            "To pay for vacations",
            "To buy luxury items",
        ],
        1,
        "An emergency fund covers unexpected expenses without going into debt. "
        "It keeps you from using credit cards or loans for emergencies.",
        BASIC,
        1,
        ["emergency", "fund", "safety", "debt"],
        "Think about what happens when unexpected expenses arise.",
    ),
    _q(
        "What percentage of your income should you save according to the 50/30/20 rule?",
        ["10%", "15%", "20%", "25%"],
        2,
        "The 50/30/20 rule suggests 50% for needs, 30% for wants, and 20% for "
        "savings and debt repayment.",
        BASIC,
        1,
        ["budget", "savings", "percentage", "rule"],
        "Remember the 50/30/20 rule breakdown.",
    ),
    _q(
        "What does 'pay yourself first' mean?",
        [
            "Buy yourself a treat every payday",
            "Put money into savings before spending on anything else",
            "Pay your bills before your friends",
            "Only spend money you earned yourself",
        ],
        1,
        "Paying yourself first means moving money into savings as soon as you get it, "
        "before it can be spent.",
        BASIC,
        2,
        ["savings", "habit", "automate"],
        "Who gets paid before the shops do?",
    ),
    # --- Investment Knowledge ---
    _q(
        "What is the main advantage of dollar-cost averaging?",
        [
            "It guarantees higher returns",
            "It reduces the impact of market volatility",
            "It eliminates all investment risk",
            "It only works with stocks",
        ],
        1,
        "Dollar-cost averaging spreads your investments over time, which reduces the "
        "impact of market volatility.",
        INVESTMENT,
        2,
        ["dollar-cost", "averaging", "volatility", "timing"],
        "Think about how spreading investments over time affects risk.",
    ),
    _q(
        "What is compound interest?",
        [
            "Interest on the principal only",
            "Interest on interest",
            "Simple interest calculation",
            "Interest paid monthly",
        ],
        1,
        "Compound interest is calculated on the principal and on the interest already "
        "earned. It's often called 'interest on interest'.",
        INVESTMENT,
        2,
        ["compound", "interest", "principal", "accumulated"],
        "Think about earning interest on your interest.",
    ),
    _q(
        "What does 'diversification' mean in investing?",
        [
            "Putting all money in one stock",
            "Spreading investments across different assets",
            "Only investing in bonds",
            "Avoiding all investments",
        ],
        1,
        "Diversification spreads your money across different assets so one bad "
        "investment can't sink everything.",
        INVESTMENT,
        1,
        ["diversification", "risk", "assets"],
        "Don't put all your eggs in one basket.",
    ),
    # --- Credit Knowledge ---
    _q(
        "What percentage of your credit score is based on payment history?",
        ["15%", "25%", "35%", "45%"],
        2,
        "Payment history accounts for 35% of your credit score, making it the most "
        "important factor.",
        CREDIT,
        2,
        ["credit", "score", "payment", "history"],
        "Payment history is the most important factor in credit scoring.",
    ),
    _q(
        "What is the recommended credit utilization ratio?",
        ["Below 30%", "Below 50%", "Below 70%", "Below 90%"],
        0,
        "Keeping credit utilization below 30% shows lenders you're not overextending "
        "yourself.",
        CREDIT,
        2,
        ["credit", "utilization", "ratio", "percentage"],
        "Lower utilization shows better credit management.",
    ),
    _q(
        "What is the snowball method for paying off debt?",
        [
            "Pay highest interest debts first",
            "Pay smallest debts first",
            "Pay all debts equally",
            "Only pay minimum payments",
        ],
        1,
        "The snowball method pays the smallest debts first to build momentum.",
        CREDIT,
        3,
        ["debt", "snowball", "payoff"],
        "A snowball starts small and grows.",
    ),
    # --- Advanced Financial Planning ---
    _q(
        "What is the 'Rule of 72' used for?",
        [
            "Calculating tax deductions",
            "Estimating how long it takes for money to double at a given interest rate",
            "Determining credit card interest",
            "Calculating mortgage payments",
        ],
        1,
        "Divide 72 by the interest rate to estimate how many years it takes for money "
        "to double.",
        PLANNING,
        3,
        ["rule", "72", "double", "interest"],
        "This rule helps estimate investment growth time.",
    ),
    _q(
        "What is the difference between a Roth IRA and a Traditional IRA?",
        [
            "No difference",
            "Roth IRA contributions are tax-deductible",
            "Traditional IRA withdrawals are tax-free",
            "Roth IRA withdrawals are tax-free",
        ],
        3,
        "Roth IRA contributions use after-tax money, so withdrawals in retirement are "
        "tax-free. Traditional IRA withdrawals are taxed.",
        PLANNING,
        3,
        ["roth", "traditional", "ira", "tax"],
        "Think about when taxes are paid on contributions vs. withdrawals.",
    ),
    # --- Kids Money Basics ---
    _q(
        "You have 10 coins and want a 25-coin toy. What is the smartest plan?",
        [
            "Borrow 15 coins and buy it today",
            "Save a little each week until you have 25",
            "Forget about it forever",
            "Spend your 10 coins on candy instead",
        ],
        1,
        "Saving a bit each week lets you reach your goal without owing anyone.",
        KIDS,
        1,
        ["saving", "goal", "patience"],
        "Which plan doesn't leave you owing coins?",
    ),
    _q(
        "Which of these is a NEED rather than a WANT?",
        ["A new video game", "Healthy food", "A fancy sticker pack", "A second bike"],
        1,
        "Needs are things you must have to live well, like food. Wants are nice extras.",
        KIDS,
        1,
        ["needs", "wants", "budget"],
        "What would you miss most if it were gone?",
    ),
    _q(
        "Why do banks pay you interest on savings?",
        [
            "Because they like you",
            "Because they use your money to make loans",
            "Because it's a birthday present",
            "They never pay interest",
        ],
        1,
        "Banks lend out the money you save and share some of what they earn as interest.",
        KIDS,
        2,
        ["bank", "interest", "savings"],
        "What does the bank do with money while it waits?",
    ),
)


def build_default_bank() -> QuestionBank:
    """기본 금융 문해 문항 뱅크"""
    return QuestionBank(DEFAULT_QUESTIONS)
