"""이벤트 유형 상수

호스트의 효과음/피드백 트리거와 분석 화면이 구독한다.
"""


class EventTypes:
    """이벤트 유형 문자열 상수"""

    # dialogue
    DIALOGUE_STARTED = "dialogue_started"
    DIALOGUE_NODE_ENTERED = "dialogue_node_entered"
    DIALOGUE_NODE_EXITED = "dialogue_node_exited"
    DIALOGUE_OPTION_SELECTED = "dialogue_option_selected"
    DIALOGUE_ENDED = "dialogue_ended"

    # quiz
    QUIZ_STARTED = "quiz_started"
    QUIZ_UNAVAILABLE = "quiz_unavailable"
    QUIZ_ANSWERED = "quiz_answered"
    QUIZ_COMPLETED = "quiz_completed"
