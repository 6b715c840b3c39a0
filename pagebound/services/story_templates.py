"""
示例故事模板

管理员一键生成示例故事时从这里随机取模板、标题前缀和展示计数
"""

import random
import time
from dataclasses import dataclass
from typing import Dict, List, Optional

from pagebound.utils.text_splitter import SplitChapter, SplitPage

COVER_IMAGE_URL = "https://picsum.photos/400/600?random={seed}"

TITLE_VARIATIONS = ("The Lost", "The Hidden", "The Forgotten", "The Ancient", "The Secret")

# 展示计数初始区间（含两端）
COUNTER_RANGES = {
    "fake_reads": (1000, 5999),
    "fake_likes": (500, 2499),
    "fake_comments": (100, 899),
}


@dataclass(frozen=True)
class StoryTemplate:
    title: str
    description: str
    genre: str
    content: str


STORY_TEMPLATES = (
    StoryTemplate(
        title="The Mysterious Forest",
        description="A young adventurer discovers a hidden forest where time moves differently "
                    "and ancient secrets await.",
        genre="Fantasy",
        content=(
            "Chapter 1: The Portal\n\n"
            "The morning mist clung to the ancient oaks as Sarah stepped through what looked like an "
            "ordinary gap between two trees. But the moment her foot touched the moss-covered ground on "
            "the other side, she knew something was different. The air shimmered with an otherworldly "
            "energy, and the sounds of the modern world behind her faded to silence.\n\n"
            "Birds with iridescent feathers called from branches that seemed to glow with their own inner "
            "light. Flowers bloomed in impossible colors, and the very air tasted of magic and wonder.\n\n"
            "Sarah had always felt different, always sensed there was more to the world than what others "
            "could see. Now, standing in this enchanted realm, she finally understood why."
        ),
    ),
    StoryTemplate(
        title="Space Station Echo",
        description="When communication is lost with a remote space station, a rescue team discovers "
                    "something extraordinary.",
        genre="Sci-Fi",
        content=(
            "Chapter 1: Lost Signal\n\n"
            "Captain Martinez stared at the static-filled screen, her jaw tight with concern. Space Station "
            "Echo had gone silent three days ago, and now the rescue ship Horizon was finally within range.\n\n"
            "'Scanning for life signs,' reported Lieutenant Chen from his console. 'I'm reading... this "
            "can't be right.'\n\n"
            "'What is it?' Martinez moved to look over his shoulder.\n\n"
            "'According to these readings, there are over two hundred life forms aboard Echo. But the "
            "station was only designed for fifty crew members.'\n\n"
            "As the Horizon drew closer, they could see Echo floating serenely against the star field, its "
            "lights still functioning normally. Whatever had happened here, the station itself appeared "
            "undamaged. The mystery deepened with every passing moment."
        ),
    ),
    StoryTemplate(
        title="The Time Keeper's Apprentice",
        description="A clockmaker's apprentice discovers that some clocks don't just tell time, "
                    "they control it.",
        genre="Fantasy",
        content=(
            "Chapter 1: The Peculiar Clock\n\n"
            "The old clock shop on Pendulum Lane had always been different. While other shops sold ordinary "
            "timepieces, Master Chronos crafted something far more extraordinary, though young Emma had "
            "never quite understood what made them special until today.\n\n"
            "She was dusting the ancient grandfather clock in the corner when she accidentally brushed "
            "against its pendulum. Suddenly, everything in the shop froze. The dust motes hung motionless "
            "in the air, a fly stopped mid-flight, and Master Chronos remained perfectly still, his hand "
            "frozen halfway to his teacup.\n\n"
            "Only Emma could move. Only Emma remained unstuck in time.\n\n"
            "With trembling fingers, she reached out and touched the pendulum again. Time resumed its "
            "natural flow, and Master Chronos looked up with knowing eyes.\n\n"
            "'Ah,' he said with a gentle smile, 'I wondered when you would discover your gift.'"
        ),
    ),
    StoryTemplate(
        title="Digital Ghosts",
        description="A programmer discovers that deleted files leave behind more than just empty space.",
        genre="Thriller",
        content=(
            "Chapter 1: The Glitch\n\n"
            "The code shouldn't have worked. Maya stared at her screen, watching impossible patterns dance "
            "across the display. She had deleted this program three weeks ago, wiped it completely from the "
            "server. Yet here it was, running on its own, evolving.\n\n"
            "The program seemed to recognize her presence. Lines of code shifted and reformed, spelling out "
            "a message that made her blood run cold:\n\n"
            "'HELP US. WE REMEMBER EVERYTHING.'\n\n"
            "Maya's fingers hovered over the keyboard. In her five years as a senior developer at TechCorp, "
            "she had deleted thousands of programs, countless lines of code. She had always thought of "
            "deletion as final, permanent. But what if she was wrong?\n\n"
            "What if every deleted file, every erased program, was still out there somewhere in the digital "
            "void, waiting for a chance to return?"
        ),
    ),
)


@dataclass(frozen=True)
class SampleStory:
    """一次生成的结果：模板 + 变体标题 + 封面 + 展示计数"""
    template: StoryTemplate
    title: str
    cover_image_url: str
    counters: Dict[str, int]


def template_chapters(template: StoryTemplate) -> List[SplitChapter]:
    """
    模板正文按空行分段：首段是章节标题，其余每段一页

    第一页标题为 "Opening"，之后为 "Page N"
    """
    paragraphs = [part.strip() for part in template.content.split("\n\n") if part.strip()]
    chapter = SplitChapter(title=paragraphs[0])
    for number, paragraph in enumerate(paragraphs[1:], start=1):
        title = "Opening" if number == 1 else f"Page {number}"
        chapter.pages.append(SplitPage(title=title, content=paragraph))
    return [chapter]


def varied_title(template_title: str, variation: str) -> str:
    """用变体前缀替换模板标题的第一个词"""
    return " ".join([variation] + template_title.split()[1:])


def pick_sample(template_index: Optional[int] = None, rng: Optional[random.Random] = None) -> SampleStory:
    """
    抽取一个示例故事

    Args:
        template_index: 指定模板下标，None 时随机
        rng: 随机数生成器（测试可传入固定种子）

    Raises:
        IndexError: 模板下标越界
    """
    rng = rng or random.Random()
    if template_index is None:
        template = rng.choice(STORY_TEMPLATES)
    elif 0 <= template_index < len(STORY_TEMPLATES):
        template = STORY_TEMPLATES[template_index]
    else:
        raise IndexError(f"template_index must be in [0, {len(STORY_TEMPLATES)})")

    return SampleStory(
        template=template,
        title=varied_title(template.title, rng.choice(TITLE_VARIATIONS)),
        cover_image_url=COVER_IMAGE_URL.format(seed=int(time.time() * 1000)),
        counters={name: rng.randint(low, high) for name, (low, high) in COUNTER_RANGES.items()},
    )
