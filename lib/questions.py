# Constants
ROLE_NON_FREELANCER = "Mahasiswa/Pelajar Non Freelancer"
ROLE_FREELANCER = "Mahasiswa/Pelajar Freelancer"
ROLE_GURU = "Guru/Dosen/Tenaga Pendidik"
ROLE_UMKM = "UMKM"

ROLE_OPTIONS = [
    ROLE_NON_FREELANCER,
    ROLE_FREELANCER,
    ROLE_GURU,
    ROLE_UMKM,
]

GENDER_OPTIONS = ["Laki-laki", "Perempuan"]
AGE_OPTIONS = ["<20 tahun", "21-30 tahun", "31-40 tahun", ">40 tahun"]

RATING_SCALE = [1, 2, 3, 4, 5]
RATING_LABELS = {1: "Sangat Tidak Setuju", 5: "Sangat Setuju"}

# Question id 3 of the general section carries the respondent role
ROLE_QUESTION_ID = 3

QA_UMUM_QUESTIONS = [
    {
        "id": 1,
        "text": "Sejauh mana Anda mengenal platform freelancing seperti Upwork, Fiverr, Sribulancer, atau Fastwork?",
        "type": "radio",
        "options": [
            "Tidak pernah mendengar",
            "Pernah dengar, tapi belum pernah pakai",
            "Pernah mencoba",
            "Sering menggunakan",
        ],
    },
    {
        "id": 2,
        "text": "Menurut Anda, apa tantangan utama dalam mencari/merekrut freelancer di platform online saat ini?",
        "type": "text",
    },
    {
        "id": ROLE_QUESTION_ID,
        "text": "Sebagai apa anda saat ini?",
        "type": "select",
        "options": ROLE_OPTIONS,
    },
]

QA_FREELANCER_QUESTIONS = [
    {
        "id": 1,
        "category": "Efisiensi Pencocokan (Matching) Berbasis AI",
        "text": "Saya merasa sistem pencocokan Freelinkd mampu menemukan proyek/kandidat yang relevan dengan cepat.",
    },
    {
        "id": 2,
        "category": "Efisiensi Pencocokan (Matching) Berbasis AI",
        "text": "Saya puas dengan relevansi antara deskripsi proyek UMKM dan keterampilan freelancer yang direkomendasikan.",
    },
    {
        "id": 3,
        "category": "AI Fairness",
        "text": "Sistem ini memberi kesempatan yang sama bagi freelancer pemula tanpa diskriminasi tersirat.",
    },
    {
        "id": 4,
        "category": "AI Fairness",
        "text": "Saya percaya bahwa hasil pencocokan didasarkan pada kualifikasi teknis dan riwayat proyek, bukan faktor pribadi.",
    },
    {
        "id": 5,
        "category": "AI Fairness",
        "text": "Saya merasa proses pencocokan di Freelinkd adil karena tidak mempertimbangkan jenis kelamin, usia, atau lokasi.",
    },
    {
        "id": 6,
        "category": "User Experience",
        "text": "Antarmuka website Freelinkd mudah digunakan dan intuitif.",
    },
    {
        "id": 7,
        "category": "User Experience",
        "text": "Saya dapat dengan mudah mengelola profil, proyek, dan komunikasi dalam satu platform.",
    },
    {
        "id": 8,
        "category": "Dampak Ekonomi & Pengembangan Karier",
        "text": "Saya mendapatkan lebih banyak peluang kerja/proyek setelah bergabung dengan Freelinkd.",
    },
    {
        "id": 9,
        "category": "Dampak Ekonomi & Pengembangan Karier",
        "text": "Platform ini membantu saya mengembangkan keterampilan professional.",
    },
    {
        "id": 10,
        "category": "Kolaborasi & Komunikasi",
        "text": "Fitur chat real-time membantu komunikasi antara UMKM dan freelancer secara efektif.",
    },
]

QA_GURU_QUESTIONS = [
    {
        "id": 1,
        "category": "Efisiensi Pencocokan (Matching) Berbasis AI",
        "text": "Sistem seperti Freelinkd dapat mengurangi ketidaksesuaian keterampilan lulusan dengan kebutuhan industri (skills mismatch).",
    },
    {
        "id": 2,
        "category": "Efisiensi Pencocokan (Matching) Berbasis AI",
        "text": "Teknologi pencocokan berbasis embedding AI dapat meningkatkan efisiensi sistem perekrutan digital.",
    },
    {
        "id": 3,
        "category": "AI Fairness",
        "text": "Saya setuju bahwa sistem yang tidak melihat usia atau gender dapat meningkatkan keadilan akses bagi siswa.",
    },
    {
        "id": 4,
        "category": "Transparansi, Kepercayaan, dan Dampak Pendidikan",
        "text": "Saya melihat pentingnya siswa/mahasiswa mendapatkan pengalaman kerja nyata selama masa studi.",
    },
    {
        "id": 5,
        "category": "Transparansi, Kepercayaan, dan Dampak Pendidikan",
        "text": "Platform dengan fitur portofolio digital membantu siswa membangun identitas profesional sejak dini.",
    },
    {
        "id": 6,
        "category": "User Experience",
        "text": "Antarmuka website Freelinkd mudah digunakan dan intuitif.",
    },
]

QA_STUDENT_QUESTIONS = [
    {
        "id": 1,
        "category": "Persepsi Terhadap Efisiensi & Teknologi AI",
        "text": "Saya percaya sistem berbasis AI dapat mempercepat proses pencarian proyek yang sesuai dengan kemampuan pengguna.",
    },
    {
        "id": 2,
        "category": "Persepsi Terhadap Efisiensi & Teknologi AI",
        "text": "Teknologi AI seperti pada Freelinkd berpotensi memudahkan mahasiswa menemukan peluang kerja digital.",
    },
    {
        "id": 3,
        "category": "AI Fairness",
        "text": "Platform kerja digital sebaiknya memberikan peluang setara bagi semua orang tanpa memandang latar belakang.",
    },
    {
        "id": 4,
        "category": "AI Fairness",
        "text": "Saya khawatir tidak mendapat proyek karena kurangnya reputasi atau ulasan pertama kali. (Reverse-coded; ukur hambatan entry-level)",
    },
    {
        "id": 5,
        "category": "Dampak Ekonomi & Pengembangan Karier",
        "text": "Saya merasa kesulitan mendapatkan pengalaman kerja nyata selama masa studi.",
    },
    {
        "id": 6,
        "category": "Dampak Ekonomi & Pengembangan Karier",
        "text": "Saya tertarik untuk menjadi freelancer di bidang teknologi, desain, atau konten digital.",
    },
    {
        "id": 7,
        "category": "Dampak Ekonomi & Pengembangan Karier",
        "text": "Saya menilai sistem seperti Freelinkd relevan dengan kebutuhan dunia kerja modern.",
    },
    {
        "id": 8,
        "category": "User Experience",
        "text": "Antarmuka website Freelinkd mudah digunakan dan intuitif.",
    },
]

QA_UMKM_QUESTIONS = [
    {
        "id": 1,
        "category": "Efisiensi Pencocokan (Matching) Berbasis AI",
        "text": "Fitur pencarian dan filter membantu saya menemukan informasi dengan cepat.",
    },
    {
        "id": 2,
        "category": "Efisiensi Pencocokan (Matching) Berbasis AI",
        "text": "Saya merasa waktu perekrutan berkurang karena sistem langsung menampilkan kandidat dengan vektor keterampilan yang mirip dengan kebutuhan proyek.",
    },
    {
        "id": 3,
        "category": "AI Fairness",
        "text": "Sistem ini memberi kesempatan yang sama bagi freelancer pemula tanpa diskriminasi tersirat.",
    },
    {
        "id": 4,
        "category": "User Experience",
        "text": "Antarmuka website Freelinkd mudah digunakan dan intuitif.",
    },
    {
        "id": 5,
        "category": "Kepercayaan & Transparansi",
        "text": "Informasi badge, harga rata-rata, dan rating membantu saya membuat keputusan kerja sama.",
    },
    {
        "id": 6,
        "category": "Kolaborasi & Komunikasi",
        "text": "Saya kesulitan merekrut tenaga kerja profesional karena keterbatasan anggaran.",
    },
    {
        "id": 7,
        "category": "Kolaborasi & Komunikasi",
        "text": "Fitur chat real-time membantu komunikasi antara UMKM dan freelancer secara efektif.",
    },
]

QA_END_QUESTIONS = [
    {
        "id": 1,
        "text": "Secara umum, saya percaya Freelinkd dapat membantu mengurangi kesenjangan antara dunia pendidikan dan dunia kerja.",
        "type": "rating",
    },
    {
        "id": 2,
        "text": "Saya bersedia merekomendasikan Freelinkd kepada orang lain yang membutuhkan.",
        "type": "rating",
    },
    {
        "id": 3,
        "text": "Saran atau masukan tambahan untuk pengembangan Freelinkd:",
        "type": "text",
    },
]

ROLE_QUESTIONS = {
    ROLE_FREELANCER: QA_FREELANCER_QUESTIONS,
    ROLE_GURU: QA_GURU_QUESTIONS,
    ROLE_NON_FREELANCER: QA_STUDENT_QUESTIONS,
    ROLE_UMKM: QA_UMKM_QUESTIONS,
}


def get_role_questions(user_role: str) -> list:
    """Role-specific question set, empty for an unknown role"""
    return ROLE_QUESTIONS.get(user_role, [])


def get_question_text(user_role: str, section: str, question_id: int) -> str:
    """
    Look up question text by section ("umum", "role", "end") and id.

    Falls back to "Pertanyaan {id}" for an unknown role or id.
    """
    if section == "umum":
        questions = QA_UMUM_QUESTIONS
    elif section == "end":
        questions = QA_END_QUESTIONS
    else:
        questions = ROLE_QUESTIONS.get(user_role)
        if questions is None:
            return f"Pertanyaan {question_id}"

    for question in questions:
        if question["id"] == question_id:
            return question["text"]
    return f"Pertanyaan {question_id}"
