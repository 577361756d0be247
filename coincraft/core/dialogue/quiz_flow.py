"""퀴즈 세션 → 대화 그래프 변환

뽑힌 문항마다 문항 노드(q{i})와 피드백 노드(feedback_{i})를 만들고
마지막에 결과 노드(results)를 둔다. 결과 노드 진입 시 FinishQuiz가 실행된다.
피드백/결과 본문은 자리표시자로 두고 렌더링 시 채운다.
"""

from string import ascii_uppercase

from coincraft.core.dialogue.effects import AnswerQuiz, FinishQuiz
from coincraft.core.dialogue.graph import DialogueGraph, DialogueGraphBuilder
from coincraft.core.dialogue.render import escape_braces
from coincraft.core.quiz.models import NoQuestionsAvailable, QuizSession

RESULTS_NODE = "results"

FEEDBACK_TEMPLATE = (
    "{feedback}\n\n{encouragement}\n{learning_tip}\n\n"
    "SmartCoins: {coins_delta} (balance {balance})\n{npc_reaction}"
)

RESULTS_TEMPLATE = (
    "Quiz complete! Grade: {grade} ({correct}/{total} correct)\n"
    "Points: {points}  Best streak: {max_streak}  Time: {time_spent}s\n"
    "Completion bonus: {completion_bonus} coins\n"
    "Current balance: {balance} SmartCoins\n\n{performance_message}"
)


def question_node_id(index: int) -> str:
    return f"q{index}"


def feedback_node_id(index: int) -> str:
    return f"feedback_{index}"


def build_quiz_graph(session: QuizSession, speaker: str) -> DialogueGraph:
    """세션 문항 순서대로 선형 퀴즈 대화를 만든다."""
    builder = DialogueGraphBuilder(f"{speaker} quiz", speaker=speaker)
    total = session.total_questions

    for i, question in enumerate(session.questions):
        lines = [f"Question {i + 1} of {total}: {escape_braces(question.prompt)}", ""]
        for letter, choice in zip(ascii_uppercase, question.choices):
            lines.append(f"{letter}) {escape_braces(choice)}")
        builder.node(
            question_node_id(i),
            "\n".join(lines),
            mood="thinking",
            difficulty=question.difficulty,
            keywords=question.keywords,
        )
        for j, (letter, choice) in enumerate(zip(ascii_uppercase, question.choices)):
            builder.option(
                question_node_id(i),
                f"{letter}) {choice}",
                feedback_node_id(i),
                on_select=(AnswerQuiz(j),),
                tooltip=question.hint or None,
            )

        builder.node(feedback_node_id(i), FEEDBACK_TEMPLATE)
        if i + 1 < total:
            builder.option(feedback_node_id(i), "Next question", question_node_id(i + 1))
            builder.option(
                feedback_node_id(i), "Stop here and see my results", RESULTS_NODE
            )
        else:
            builder.option(feedback_node_id(i), "See my results", RESULTS_NODE)

    builder.node(RESULTS_NODE, RESULTS_TEMPLATE, on_enter=(FinishQuiz(),), mood="happy")
    builder.option(RESULTS_NODE, "Thanks! See you later.", None)
    return builder.build(question_node_id(0))


def build_unavailable_graph(empty: NoQuestionsAvailable, speaker: str) -> DialogueGraph:
    """문항이 없을 때의 안내 대화"""
    builder = DialogueGraphBuilder(f"{speaker} quiz", speaker=speaker)
    builder.node("no_questions", escape_braces(empty.message), mood="concerned")
    builder.option("no_questions", "Okay, maybe next time.", None)
    return builder.build("no_questions")
