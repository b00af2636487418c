"""
Static vocabulary for the Targeting context.

Immutable lookup tables shared by the repository scorer and skill categorizer:

- SkillCategory: the six output categories, in lookup order
- SKILL_VOCABULARY: category -> canonical skill name -> keyword aliases
- ROLE_KEYWORDS / ROLE_TITLES: role hint vocabulary
- POPULAR_LANGUAGES: mainstream languages for the language popularity tier

The canonical skill names are the output vocabulary: a skill that is not
listed here never appears in categorized output.
"""

from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


class SkillCategory(Enum):
    """Output categories, declared in the order they are checked."""

    LANGUAGES = "languages"
    FRAMEWORKS = "frameworks"
    TOOLS = "tools"
    DATABASES = "databases"
    CLOUD = "cloud"
    TESTING = "testing"

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]


CATEGORY_LABELS = MappingProxyType(
    {
        SkillCategory.LANGUAGES: "Languages",
        SkillCategory.FRAMEWORKS: "Frameworks",
        SkillCategory.TOOLS: "Tools",
        SkillCategory.DATABASES: "Databases",
        SkillCategory.CLOUD: "Cloud",
        SkillCategory.TESTING: "Testing",
    }
)


def _freeze(table: Mapping[str, Tuple[str, ...]]) -> Mapping[str, Tuple[str, ...]]:
    return MappingProxyType(dict(table))


SKILL_VOCABULARY: Mapping[SkillCategory, Mapping[str, Tuple[str, ...]]] = MappingProxyType(
    {
        SkillCategory.LANGUAGES: _freeze(
            {
                "JavaScript": ("javascript", "js", "node", "nodejs"),
                "TypeScript": ("typescript", "ts"),
                "Python": ("python", "py"),
                "Java": ("java",),
                "C++": ("cpp", "c++", "cxx"),
                "C#": ("csharp", "c#", "dotnet"),
                "Go": ("go", "golang"),
                "Rust": ("rust", "rs"),
                "PHP": ("php",),
                "Ruby": ("ruby", "rb"),
                "Swift": ("swift",),
                "Kotlin": ("kotlin", "kt"),
                "Dart": ("dart",),
                "Scala": ("scala",),
                "R": ("r",),
                "Shell": ("shell", "bash", "zsh", "sh"),
                "HTML": ("html", "htm"),
                "CSS": ("css", "scss", "sass", "less"),
                "SQL": ("sql", "mysql", "postgresql", "sqlite"),
            }
        ),
        SkillCategory.FRAMEWORKS: _freeze(
            {
                "React": ("react", "reactjs", "jsx"),
                "Vue.js": ("vue", "vuejs"),
                "Angular": ("angular", "angularjs"),
                "Next.js": ("nextjs", "next"),
                "Nuxt.js": ("nuxtjs", "nuxt"),
                "Svelte": ("svelte", "sveltekit"),
                "Express.js": ("express", "expressjs"),
                "Fastify": ("fastify",),
                "Koa": ("koa", "koajs"),
                "Django": ("django",),
                "Flask": ("flask",),
                "FastAPI": ("fastapi",),
                "Spring": ("spring", "spring-boot"),
                "Laravel": ("laravel",),
                "Ruby on Rails": ("rails", "ruby-on-rails"),
                "ASP.NET": ("aspnet", "asp.net"),
                "Flutter": ("flutter",),
                "React Native": ("react-native", "reactnative"),
                "Ionic": ("ionic",),
                "Electron": ("electron",),
                "Tauri": ("tauri",),
            }
        ),
        SkillCategory.TOOLS: _freeze(
            {
                "Git": ("git", "github", "gitlab", "bitbucket"),
                "Docker": ("docker", "dockerfile"),
                "Kubernetes": ("kubernetes", "k8s"),
                "Webpack": ("webpack",),
                "Vite": ("vite", "vitejs"),
                "Babel": ("babel", "babeljs"),
                "ESLint": ("eslint",),
                "Prettier": ("prettier",),
                "Jenkins": ("jenkins",),
                "GitHub Actions": ("github-actions", "workflows"),
                "GitLab CI": ("gitlab-ci",),
                "Terraform": ("terraform",),
                "Ansible": ("ansible",),
                "Vagrant": ("vagrant",),
                "npm": ("npm", "package.json"),
                "Yarn": ("yarn",),
                "pnpm": ("pnpm",),
                "Maven": ("maven", "pom.xml"),
                "Gradle": ("gradle",),
                "CMake": ("cmake",),
                "Make": ("makefile", "make"),
            }
        ),
        SkillCategory.DATABASES: _freeze(
            {
                "PostgreSQL": ("postgresql", "postgres", "psql"),
                "MySQL": ("mysql",),
                "SQLite": ("sqlite", "sqlite3"),
                "MongoDB": ("mongodb", "mongo"),
                "Redis": ("redis",),
                "Elasticsearch": ("elasticsearch", "elastic"),
                "Cassandra": ("cassandra",),
                "DynamoDB": ("dynamodb",),
                "Firebase": ("firebase", "firestore"),
                "Supabase": ("supabase",),
                "PlanetScale": ("planetscale",),
                "Prisma": ("prisma",),
                "Sequelize": ("sequelize",),
                "Mongoose": ("mongoose",),
                "TypeORM": ("typeorm",),
            }
        ),
        SkillCategory.CLOUD: _freeze(
            {
                "AWS": ("aws", "amazon-web-services", "ec2", "s3", "lambda", "cloudformation"),
                "Google Cloud": ("gcp", "google-cloud", "gce", "cloud-functions"),
                "Azure": ("azure", "microsoft-azure"),
                "Vercel": ("vercel",),
                "Netlify": ("netlify",),
                "Heroku": ("heroku",),
                "DigitalOcean": ("digitalocean", "droplet"),
                "Cloudflare": ("cloudflare",),
                "Railway": ("railway",),
                "Render": ("render",),
            }
        ),
        SkillCategory.TESTING: _freeze(
            {
                "Jest": ("jest",),
                "Vitest": ("vitest",),
                "Mocha": ("mocha",),
                "Chai": ("chai",),
                "Cypress": ("cypress",),
                "Playwright": ("playwright",),
                "Selenium": ("selenium",),
                "Testing Library": ("testing-library", "@testing-library"),
                "Enzyme": ("enzyme",),
                "Puppeteer": ("puppeteer",),
                "Storybook": ("storybook",),
                "JUnit": ("junit",),
                "PyTest": ("pytest",),
                "RSpec": ("rspec",),
            }
        ),
    }
)

ROLE_KEYWORDS: Mapping[str, Tuple[str, ...]] = MappingProxyType(
    {
        "frontend": ("react", "vue", "angular", "javascript", "typescript", "css", "html", "sass", "webpack", "vite"),
        "backend": ("node", "express", "fastify", "python", "django", "flask", "java", "spring", "go", "rust", "api"),
        "fullstack": ("react", "vue", "angular", "node", "express", "next", "nuxt", "typescript", "javascript"),
        "mobile": ("react-native", "flutter", "swift", "kotlin", "ios", "android", "mobile", "app"),
        "devops": ("docker", "kubernetes", "terraform", "ansible", "jenkins", "github-actions", "aws", "azure", "gcp"),
        "data": ("python", "jupyter", "pandas", "numpy", "tensorflow", "pytorch", "scikit-learn", "sql", "spark"),
        "ml": ("tensorflow", "pytorch", "scikit-learn", "keras", "opencv", "nlp", "deep-learning", "neural-network"),
        "security": ("security", "cryptography", "auth", "oauth", "jwt", "penetration", "vulnerability", "encryption"),
    }
)

DEFAULT_ROLE_TITLE = "Software Developer"

ROLE_TITLES: Mapping[str, str] = MappingProxyType(
    {
        "frontend": "Frontend Developer",
        "backend": "Backend Developer",
        "fullstack": "Full-Stack Developer",
        "mobile": "Mobile Developer",
        "devops": "DevOps Engineer",
        "data": "Data Engineer",
        "ml": "Machine Learning Engineer",
        "security": "Security Engineer",
    }
)

POPULAR_LANGUAGES = frozenset(
    {
        "javascript", "typescript", "python", "java", "go", "rust", "c++", "c#",
        "php", "ruby", "swift", "kotlin", "dart", "scala", "r",
    }
)


def category_of(skill_name: str) -> Optional[SkillCategory]:
    """First category (in declaration order) that lists skill_name, else None."""
    for category in SkillCategory:
        if skill_name in SKILL_VOCABULARY[category]:
            return category
    return None


def role_keywords(role: Optional[str]) -> Tuple[str, ...]:
    """Keywords for a role hint (case-insensitive); empty for unknown roles."""
    if not role:
        return ()
    return ROLE_KEYWORDS.get(role.strip().lower(), ())


def role_title(role: Optional[str]) -> str:
    """Job title for a role hint, DEFAULT_ROLE_TITLE for missing or unknown roles."""
    if not role:
        return DEFAULT_ROLE_TITLE
    return ROLE_TITLES.get(role.strip().lower(), DEFAULT_ROLE_TITLE)
