"""
Questionnaire wizard navigation

Pure functions over (current_step, user_role). The session manager
holds the state; these decide where to go and how the path is shown.
"""
from typing import Dict, List, Optional

from lib.questions import ROLE_FREELANCER, ROLE_GURU, ROLE_NON_FREELANCER, ROLE_UMKM

STEP_INTRO = "intro"
STEP_QA_UMUM = "qa-umum"
STEP_QA_GURU = "qa-guru"
STEP_QA_UMKM = "qa-umkm"
STEP_QA_STUDENT = "qa-student"
STEP_QA_FREELANCER = "qa-freelancer"
STEP_QA_END = "qa-end"
STEP_RESULTS = "results"

ROLE_STEPS = [STEP_QA_FREELANCER, STEP_QA_UMKM, STEP_QA_GURU, STEP_QA_STUDENT]

ALL_STEPS = [STEP_INTRO, STEP_QA_UMUM, *ROLE_STEPS, STEP_QA_END, STEP_RESULTS]

# Intro, general, one role-specific panel, closing
TOTAL_STEPS = 4

ROLE_TO_STEP = {
    ROLE_GURU: STEP_QA_GURU,
    ROLE_UMKM: STEP_QA_UMKM,
    ROLE_NON_FREELANCER: STEP_QA_STUDENT,
    ROLE_FREELANCER: STEP_QA_FREELANCER,
}

STEP_LABELS = {
    STEP_INTRO: "Home",
    STEP_QA_UMUM: "Kuesioner Umum",
    STEP_QA_FREELANCER: "Kuesioner Freelancer",
    STEP_QA_UMKM: "Kuesioner UMKM",
    STEP_QA_GURU: "Kuesioner Guru",
    STEP_QA_STUDENT: "Kuesioner Mahasiswa",
    STEP_QA_END: "Kuesioner Penutup",
}

STEP_HEADERS = {
    1: {
        "title": "Kuesioner Penelitian",
        "description": "Isi kuesioner untuk membantu proses pengumpulan data penelitian",
    },
    2: {
        "title": "Pertanyaan Umum",
        "description": "Menilai aspek pengalaman menggunakan platform freelancing",
    },
    4: {
        "title": "Kuesioner Penutup",
        "description": "Pertanyaan akhir untuk melengkapi data penelitian",
    },
}

ROLE_HEADERS = {
    ROLE_GURU: {
        "title": "Kuesioner Untuk Guru",
        "description": "Bantu kami memahami perspektif Anda sebagai tenaga pendidik",
    },
    ROLE_UMKM: {
        "title": "Kuesioner Untuk UMKM",
        "description": "Bantu kami memahami kebutuhan bisnis Anda terkait platform freelance",
    },
    ROLE_NON_FREELANCER: {
        "title": "Kuesioner Untuk Mahasiswa",
        "description": "Bantu kami memahami pandangan Anda mengenai ekosistem freelance",
    },
    ROLE_FREELANCER: {
        "title": "Kuesioner Untuk Freelancer",
        "description": "Bantu kami memahami kebutuhan dan pengalaman Anda di platform digital",
    },
}

RESULTS_HEADER = {
    "title": "Jawaban Anda Telah Tersimpan",
    "description": "Terima kasih atas partisipasi Anda dalam penelitian ini",
}


def role_step(user_role: str) -> Optional[str]:
    """Role-specific step for a role label (exact match), None if unknown"""
    return ROLE_TO_STEP.get(user_role)


def is_role_step(step: str) -> bool:
    return step in ROLE_STEPS


def previous_step(current_step: str, user_role: str) -> str:
    """Step reached by going back; unchanged where there is nowhere to go"""
    if current_step == STEP_QA_UMUM:
        return STEP_INTRO
    if is_role_step(current_step):
        return STEP_QA_UMUM
    if current_step == STEP_QA_END:
        return role_step(user_role) or current_step
    return current_step


def path_steps(user_role: str) -> List[str]:
    """Full forward path for a role"""
    steps = [STEP_INTRO, STEP_QA_UMUM]
    step = role_step(user_role)
    if step:
        steps.append(step)
    steps.append(STEP_QA_END)
    return steps


def step_number(current_step: str, user_role: str) -> int:
    """1-based position on the path, 0 when the step is not on it (results)"""
    steps = path_steps(user_role)
    if current_step not in steps:
        return 0
    return steps.index(current_step) + 1


def breadcrumb_steps(current_step: str, user_role: str) -> List[str]:
    steps = [STEP_INTRO]

    if current_step == STEP_QA_UMUM or is_role_step(current_step) or current_step == STEP_QA_END:
        steps.append(STEP_QA_UMUM)

    if is_role_step(current_step):
        steps.append(current_step)

    if current_step == STEP_QA_END:
        step = role_step(user_role)
        if step:
            steps.append(step)
        steps.append(STEP_QA_END)

    return steps


def breadcrumb_items(current_step: str, user_role: str) -> List[str]:
    return [STEP_LABELS[step] for step in breadcrumb_steps(current_step, user_role)]


def header_content(current_step: str, user_role: str) -> Dict[str, str]:
    number = step_number(current_step, user_role)
    if number == 3 and user_role in ROLE_HEADERS:
        return ROLE_HEADERS[user_role]
    return STEP_HEADERS.get(number, RESULTS_HEADER)
