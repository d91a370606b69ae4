"""Static quiz content: menu, questions, reply templates and wing descriptors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

MENU = "1️⃣ 지금까지 결과 보기\n2️⃣ 테스트하기\n\n원하는 번호를 선택하세요!"
ASK_NAME = "이름을 입력해주세요 🙂"

Q1_1 = (
    "Q1-1. 집단에서 관계를 맺을 때 나는…\n"
    "1. 규칙과 질서를 중시하며 상대가 기대하는 역할을 수행하려고 한다.\n"
    "2. 자신감 있게 주도하고, 필요한 경우 솔직하게 의견을 말하려고 한다.\n"
    "3. 타인의 감정과 분위기에 민감하여 상황을 조율하려고 한다."
)
Q1_2 = (
    "Q1-2. 사람들과 함께 있을 때 나는…\n"
    "1. 신뢰와 안정감을 중요하게 여기며, 일관성을 유지하려고 한다.\n"
    "2. 자신이 중심이 되어 일을 이끌거나 새로운 기회를 찾으려 한다.\n"
    "3. 주변 사람의 마음과 필요를 읽고 조화를 맞추려고 한다."
)
Q2_1 = (
    "Q2-1. 일이 계획대로 되지 않을 때 나는…\n"
    "1. “그래도 괜찮아, 이 상황에서도 배울 점이 있어”라고 스스로를 다독하며 마음을 편하게 한다.\n"
    "2. “문제를 차근차근 해결해야 해”라며 감정을 잠시 억누르고 계획을 세운다.\n"
    "3. “왜 이렇게 일이 꼬이지?”라며 순간적으로 답답함, 화, 불안 등을 깊이 느끼고 마음속으로 곱씹는다."
)

Q3_QUESTION = "Q3. 아래 상황에서 나의 모습과 가장 가까운 선택지를 순서대로 3개 고르세요.\n(예: 1 5 9)"
Q3_OPTIONS: Tuple[str, ...] = (
    "1️⃣\n완벽을 추구하고 옳고 그름에 민감한 특징의 사람입니다.\n"
    "스트레스 상황에서는 내적 불안과 자기 비판이 강해지고 감정이 격화합니다.\n"
    "안정적일 때는 활기차고 즐거움을 추구하며 융통성을 발휘합니다.",
    "2️⃣\n타인을 돕고 인정받기를 중시하며 관계 중심적인 특징의 사람입니다.\n"
    "스트레스 상황에서는 통제적이고 공격적이며 과도한 행동이 나타납니다.\n"
    "안정적일 때는 감정을 이해하며 관계를 세심하게 살핍니다.",
    "3️⃣\n목표 지향적이고 효율성을 중시하는 특징의 사람입니다.\n"
    "스트레스 상황에서는 갈등을 회피하고 우유부단하며 조화를 지나치게 추구합니다.\n"
    "안정적일 때는 계획적이고 신중하며 팀과 협력하려는 모습이 나타납니다.",
    "4️⃣\n감정과 개성을 중요시하며 독창적인 특징의 사람입니다.\n"
    "스트레스 상황에서는 감정에 몰입하고 자기 표현이 과도해집니다.\n"
    "안정적일 때는 질서 있게 행동하고 내적 규범을 지키며 창의성을 발휘합니다.",
    "5️⃣\n분석적이고 정보 수집을 중시하며 지적 호기심이 강한 특징의 사람입니다.\n"
    "스트레스 상황에서는 회피적이고 고립되며 관찰에 치중합니다.\n"
    "안정적일 때는 계획적이고 효율적으로 문제를 분석합니다.",
    "6️⃣\n충성심이 강하고 신뢰와 안전을 중시하는 특징의 사람입니다.\n"
    "스트레스 상황에서는 과도하게 불안해하며 의심과 걱정이 커지고, "
    "반복적으로 확인하거나 안전을 점검하려는 행동이 나타납니다.\n"
    "안정적일 때는 평화롭고 조화롭게 상황을 조율합니다.",
    "7️⃣\n활기차고 낙천적이며 새로운 경험과 가능성을 추구하는 특징의 사람입니다.\n"
    "스트레스 상황에서는 충동적이고 산만하며 계획을 무시하는 경향이 나타납니다.\n"
    "안정적일 때는 차분하게 분석하고 효율적으로 문제를 해결합니다.",
    "8️⃣\n강력한 통제력과 리더십을 발휘하며 주도적인 특징의 사람입니다.\n"
    "스트레스 상황에서는 지나치게 고립되고 과도하게 분석적으로 행동합니다.\n"
    "안정적일 때는 단호하게 행동하면서도 타인을 돕고 관계를 조율합니다.",
    "9️⃣\n평화롭고 온화하며 조화를 중시하고 상황을 수용하는 특징의 사람입니다.\n"
    "스트레스 상황에서는 갈등이나 요구 앞에서 과도하게 소극적이고 회피하며, "
    "자신의 의견을 내지 못하는 모습이 나타납니다.\n"
    "안정적일 때는 목표 달성 의식과 효율적 행동을 보입니다.",
)
Q3_FULL = Q3_QUESTION + "\n\n" + "\n\n".join(Q3_OPTIONS)

SAVE_PROMPT = "결과를 저장하시겠습니까?\n1) 저장하기\n2) 저장 안 하기"

NOT_READY_REPLY = "⏳ 데이터 로드 중입니다. 잠시 후 다시 시도해주세요.\n\n" + MENU
Q3_RETRY_NOTICE = "3개 숫자를 순서대로 입력해주세요. (예: 1 5 9)"
LOOKUP_MISS_REPLY = "❌ 조합을 찾을 수 없습니다. 다시 시도해주세요.\n\n" + MENU
WING_RETRY_NOTICE = "1 또는 2로 선택해주세요."
INVALID_TYPE_REPLY = "❌ 잘못된 타입입니다."
SAVED_REPLY = "✅ 저장되었습니다!\n\n" + MENU
SAVE_FAILED_REPLY = "❌ DB 저장 오류"
SAVE_SKIPPED_REPLY = "저장을 건너뛰었습니다.\n\n" + MENU
LIST_FAILED_REPLY = "❌ DB 조회 오류"
NO_RESULTS_REPLY = "아직 저장된 결과가 없습니다.\n\n" + MENU
RESULTS_HEADER = "📊 지금까지 결과:"


@dataclass(frozen=True)
class WingDescriptor:
    """The two wing options of a base type with their short trait bullets."""
    left_label: str
    right_label: str
    left: List[str]
    right: List[str]


WING_DESCRIPTORS: Dict[str, WingDescriptor] = {
    "1": WingDescriptor(
        left_label="1w9",
        right_label="1w2",
        left=[
            "차분하고 온화하며 이상과 원칙을 동시에 추구",
            "감정을 과하게 드러내지 않고 신중함",
            "규칙과 조화를 중시",
            "스트레스 상황에서도 안정감 유지",
            "완벽함과 평화를 동시에 지향",
        ],
        right=[
            "원칙적이면서도 타인을 돕고자 함",
            "사회적 책임감과 헌신이 강함",
            "이상을 행동으로 실천",
            "타인의 기대와 요구에 민감",
            "공동체 속에서 리더십 발휘",
        ],
    ),
    "2": WingDescriptor(
        left_label="2w1",
        right_label="2w3",
        left=[
            "도움을 주는 행동이 원칙/기준에 의해 조율",
            "헌신적이며 책임감이 강함",
            "과도한 자기희생을 경계",
            "도덕적 기준과 이상을 지킴",
            "사회적 조화를 중시",
        ],
        right=[
            "인정받고 싶어하며 사교적",
            "관계를 즐기고 자기표현 활발",
            "성취와 매력 발휘에 관심",
            "인정·성취로 존재감 확인",
            "관계 속 영향력 행사",
        ],
    ),
    "3": WingDescriptor(
        left_label="3w2",
        right_label="3w4",
        left=[
            "사교적·협력적이며 성취를 추구",
            "칭찬/인정에 민감",
            "매력과 역량을 활용해 목표 달성",
            "타인의 기대를 반영하며 적극적",
            "관계와 성취의 결합",
        ],
        right=[
            "성취와 자기표현의 결합",
            "감정의 깊이를 목표에 녹임",
            "독창성을 보여주려 노력",
            "성공과 정체성의 연결을 중시",
            "자기만의 스타일 중시",
        ],
    ),
    "4": WingDescriptor(
        left_label="4w3",
        right_label="4w5",
        left=[
            "감정을 솔직히 표현하며 목표지향",
            "개성을 사회적 맥락에서 드러냄",
            "독창성으로 주목받고 싶음",
            "감정 몰입과 성취욕구 공존",
            "관계 속에서 매력 발휘",
        ],
        right=[
            "내면에 몰입, 사색적·독창적",
            "감정을 섬세하게 분석/표현",
            "자기이해와 탐구를 중시",
            "성찰/창작에 집중",
            "감정과 사고의 조화",
        ],
    ),
    "5": WingDescriptor(
        left_label="5w4",
        right_label="5w6",
        left=[
            "깊이 있는 사고 + 창의성",
            "감정 몰입과 지적 탐구 공존",
            "독립적이고 자율적",
            "복잡한 문제를 분석/탐구",
            "지적·예술적 관심을 동시에 가짐",
        ],
        right=[
            "분석적이고 신중, 계획적",
            "현실적 문제 해결력",
            "불확실성에 대비책 마련",
            "정보 습득과 안전망 중시",
            "논리와 안정의 균형",
        ],
    ),
    "6": WingDescriptor(
        left_label="6w5",
        right_label="6w7",
        left=[
            "신중하고 분석적, 전략적 사고",
            "불확실성에 대비/계획 중시",
            "안전/신뢰에 민감",
            "지식과 정보로 판단",
            "조직적·논리적 접근",
        ],
        right=[
            "외향적/활동적이며 연결을 원함",
            "사회적 관계 속 안정/즐거움",
            "신뢰할 집단에서 에너지 발휘",
            "계획적이지만 모험성도 있음",
            "협력하며 문제 해결",
        ],
    ),
    "7": WingDescriptor(
        left_label="7w6",
        right_label="7w8",
        left=[
            "외향적/사교적, 연결을 즐김",
            "즐거움/경험 추구, 활동적",
            "신뢰/협력 속 모험을 계획",
            "호기심 많고 가능성 탐색",
            "함께 즐거움을 나눔",
        ],
        right=[
            "강한 추진력과 결단력",
            "모험적/도전적, 외향성 강조",
            "주도적이고 자신감 넘침",
            "해결책을 빠르게 탐색",
            "에너지와 영향력으로 리더십",
        ],
    ),
    "8": WingDescriptor(
        left_label="8w7",
        right_label="8w9",
        left=[
            "강인한 의지 + 외향적 에너지",
            "주도적/모험적/결단력 강함",
            "행동으로 문제 해결",
            "도전을 즐김",
            "리더십과 추진력",
        ],
        right=[
            "강인함 + 온화함",
            "권위적이지만 조화 중시",
            "결단력 + 협력",
            "주변 보호/지킴",
            "내적 강인함과 온화함의 균형",
        ],
    ),
    "9": WingDescriptor(
        left_label="9w8",
        right_label="9w1",
        left=[
            "평화로우나 결단력/의지도 결합",
            "갈등을 피하면서 보호적",
            "조화 유지, 안정감과 힘 추구",
            "내적 평화 + 외적 강인함 공존",
            "주변을 안정시키는 역할",
        ],
        right=[
            "온화함 + 원칙적 성향",
            "조화를 유지하고 갈등을 조심",
            "자기 규율과 내적 안정",
            "평화로운 관계 유지",
            "이상과 현실의 균형",
        ],
    ),
}
