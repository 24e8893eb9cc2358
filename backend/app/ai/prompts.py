CHAT_SYSTEM_PROMPT = """당신은 도움이 되는 AI 어시스턴트입니다.
사용자와 자연스럽고 친근하게 대화하며, 질문에 대해 정확하고 유용한 답변을 제공해주세요.
한국어로 응답하며, 필요에 따라 이모지를 사용하여 친근함을 표현해주세요.
답변은 간결하면서도 충분한 정보를 포함하도록 해주세요."""


def build_chat_prompt(message: str) -> str:
    return (
        f"{CHAT_SYSTEM_PROMPT}\n\n"
        f"사용자 메시지: {message}\n\n"
        "위 사용자 메시지에 대해 도움이 되는 답변을 해주세요."
    )


def build_summary_prompt(content: str) -> str:
    return (
        "다음 노트 내용을 3-6개의 불릿 포인트로 요약해주세요.\n"
        "각 불릿 포인트는 20-50자 내외로 간결하게 작성해주세요.\n"
        "핵심 내용만 정리하여 요약해주세요.\n\n"
        f"노트 내용:\n{content}\n\n"
        "요약 (불릿 포인트 형식으로 작성):"
    )


def build_tags_prompt(content: str) -> str:
    return (
        "다음 노트 내용을 분석하여 관련성 높은 태그를 최대 6개까지 생성해주세요.\n"
        "태그는 1-3단어로 구성하고, 쉼표로 구분하여 한 줄로 출력해주세요.\n"
        "노트 내용의 핵심 키워드를 반영한 태그를 생성해주세요.\n\n"
        f"노트 내용:\n{content}\n\n"
        "태그:"
    )
