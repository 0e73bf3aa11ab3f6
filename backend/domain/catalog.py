"""
Catalogue immuable des messages d'horoscope par signe.

Chaque signe dispose d'une liste ordonnée de 7 messages. L'ordre sert d'espace d'index au
sélecteur déterministe: ne jamais réordonner ni insérer au milieu d'une liste existante, sous peine
de changer rétroactivement les horoscopes déjà servis.
"""

from collections.abc import Mapping
from types import MappingProxyType

from backend.domain.zodiac import ZodiacSign

DAILY_FALLBACK = "The stars are mysterious today. Your unique path unfolds in unexpected ways."
HISTORICAL_FALLBACK = (
    "The stars were mysterious on this day. Your unique path unfolded in unexpected ways."
)

HOROSCOPE_CATALOG: Mapping[ZodiacSign, tuple[str, ...]] = MappingProxyType(
    {
        ZodiacSign.ARIES: (
            "Today brings exciting opportunities for new beginnings. Your natural leadership will shine through in unexpected ways.",  # noqa: E501
            "Mars energizes your ambitions today. Take bold action, but remember to consider others' feelings.",  # noqa: E501
            "A burst of creative energy flows through you. Channel this into a project you're passionate about.",  # noqa: E501
            "Your competitive spirit serves you well today. Trust your instincts in making important decisions.",  # noqa: E501
            "Adventure calls to you today. Embrace change and step out of your comfort zone.",
            "Your enthusiasm is contagious today. Use it to inspire others and build meaningful connections.",  # noqa: E501
            "Focus on your goals with determination. Success is within reach if you stay persistent.",
        ),
        ZodiacSign.TAURUS: (
            "Stability and comfort are your themes today. Take time to appreciate the simple pleasures in life.",  # noqa: E501
            "Your practical nature helps you solve a long-standing problem. Trust your methodical approach.",  # noqa: E501
            "Financial opportunities may present themselves. Your careful planning is about to pay off.",  # noqa: E501
            "Patience is your superpower today. Good things come to those who wait and work steadily.",
            "Your artistic side is highlighted today. Express yourself through creative endeavors.",
            "Focus on building lasting relationships. Your loyalty and dependability attract the right people.",  # noqa: E501
            "Nature calls to you today. Spend time outdoors to recharge your energy and find peace.",
        ),
        ZodiacSign.GEMINI: (
            "Communication is key today. Your words have the power to inspire and influence others positively.",  # noqa: E501
            "Your curiosity leads you to discover something fascinating. Keep an open mind to new ideas.",  # noqa: E501
            "Networking brings unexpected benefits. Your social skills open doors to new opportunities.",  # noqa: E501
            "Mental agility is your strength today. Use it to solve complex problems with ease.",
            "Variety is the spice of life today. Embrace different experiences and perspectives.",
            "Your wit and charm make you the center of attention. Use this influence wisely.",
            "Learning something new energizes you today. Feed your mind with knowledge and inspiration.",  # noqa: E501
        ),
        ZodiacSign.CANCER: (
            "Your intuition is particularly strong today. Trust your gut feelings in important matters.",  # noqa: E501
            "Home and family take center stage. Nurturing relationships brings you deep satisfaction.",
            "Emotional healing is possible today. Allow yourself to process and release old hurts.",
            "Your caring nature touches someone's heart today. Small acts of kindness make a big difference.",  # noqa: E501
            "Past experiences provide valuable insights for current challenges. Wisdom comes from reflection.",  # noqa: E501
            "Your protective instincts guide you well today. Stand up for those who need your support.",  # noqa: E501
            "Creating a comfortable environment enhances your well-being. Focus on your personal space.",  # noqa: E501
        ),
        ZodiacSign.LEO: (
            "Your natural charisma shines brightly today. Step into the spotlight and share your talents.",  # noqa: E501
            "Creative expression brings joy and recognition. Don't be afraid to show your unique style.",  # noqa: E501
            "Leadership opportunities arise. Your confidence and warmth inspire others to follow.",
            "Generosity of spirit attracts abundance. What you give freely returns to you multiplied.",
            "Your dramatic flair adds excitement to ordinary situations. Embrace your theatrical nature.",  # noqa: E501
            "Pride in your accomplishments is well-deserved today. Celebrate your successes with others.",  # noqa: E501
            "Romance and passion color your day. Open your heart to love and meaningful connections.",
        ),
        ZodiacSign.VIRGO: (
            "Attention to detail serves you well today. Your meticulous approach leads to perfect results.",  # noqa: E501
            "Organization and planning bring order to chaos. Your systematic methods create efficiency.",  # noqa: E501
            "Health and wellness deserve your focus today. Small improvements lead to significant benefits.",  # noqa: E501
            "Your analytical skills help others solve their problems. Your advice is both practical and wise.",  # noqa: E501
            "Service to others brings deep fulfillment. Your helpful nature makes a real difference.",
            "Perfectionism has its place, but don't let it paralyze progress. Aim for excellence, not perfection.",  # noqa: E501
            "Your practical wisdom guides important decisions today. Trust your logical approach.",
        ),
        ZodiacSign.LIBRA: (
            "Balance and harmony are your goals today. Seek the middle ground in all situations.",
            "Your diplomatic skills help resolve conflicts. Your fair approach brings peace to discord.",  # noqa: E501
            "Beauty and aesthetics inspire you today. Surround yourself with things that please your senses.",  # noqa: E501
            "Partnerships and relationships flourish under your caring attention. Cooperation leads to success.",  # noqa: E501
            "Justice and fairness guide your actions today. Stand up for what's right with grace.",
            "Your charm and social grace open doors. Use your people skills to build bridges.",
            "Decision-making requires careful consideration today. Weigh all options before choosing.",
        ),
        ZodiacSign.SCORPIO: (
            "Deep transformation is possible today. Embrace change as a path to personal growth.",
            "Your intuitive powers are heightened. Trust the insights that come from within.",
            "Mysteries and secrets may be revealed today. Your investigative nature uncovers hidden truths.",  # noqa: E501
            "Emotional intensity brings both challenges and breakthroughs. Channel your passion constructively.",  # noqa: E501
            "Your magnetic personality draws others to you. Use this influence with wisdom and compassion.",  # noqa: E501
            "Regeneration and renewal are your themes today. Let go of what no longer serves you.",
            "Your determination overcomes any obstacle. Persistence and focus lead to victory.",
        ),
        ZodiacSign.SAGITTARIUS: (
            "Adventure and exploration call to your spirit today. Expand your horizons in every way possible.",  # noqa: E501
            "Your philosophical nature seeks deeper meaning. Wisdom comes through experience and reflection.",  # noqa: E501
            "Freedom and independence are essential today. Break free from limiting circumstances.",
            "Your optimistic outlook inspires others. Share your positive vision of the future.",
            "Learning and teaching go hand in hand today. Knowledge shared is knowledge multiplied.",
            "Travel, whether physical or mental, broadens your perspective. Embrace new cultures and ideas.",  # noqa: E501
            "Your honesty and directness, though sometimes blunt, brings clarity to confusing situations.",  # noqa: E501
        ),
        ZodiacSign.CAPRICORN: (
            "Ambition and determination drive you toward your goals today. Success is built step by step.",  # noqa: E501
            "Your practical approach to problems yields concrete results. Steady progress leads to achievement.",  # noqa: E501
            "Responsibility and duty guide your actions today. Others rely on your dependable nature.",
            "Long-term planning pays off today. Your patience and persistence create lasting foundations.",  # noqa: E501
            "Authority and leadership come naturally to you today. Others look to you for guidance.",
            "Tradition and structure provide stability in uncertain times. Honor the wisdom of experience.",  # noqa: E501
            "Your disciplined approach to challenges ensures victory. Hard work always pays off.",
        ),
        ZodiacSign.AQUARIUS: (
            "Innovation and originality set you apart today. Your unique perspective offers fresh solutions.",  # noqa: E501
            "Humanitarian causes capture your attention. Your desire to help others creates positive change.",  # noqa: E501
            "Friendship and community are highlighted today. Your social network provides valuable support.",  # noqa: E501
            "Your independent spirit refuses to be confined. Freedom of thought and action are essential.",  # noqa: E501
            "Technology and progress fascinate you today. Embrace new ways of doing things.",
            "Your eccentric nature is actually your greatest strength. Don't try to fit conventional molds.",  # noqa: E501
            "Group efforts and teamwork achieve remarkable results. Your collaborative spirit inspires others.",  # noqa: E501
        ),
        ZodiacSign.PISCES: (
            "Your compassionate nature touches many hearts today. Empathy and understanding heal old wounds.",  # noqa: E501
            "Intuition and psychic sensitivity guide your decisions. Trust the messages from your inner voice.",  # noqa: E501
            "Creativity flows through you like a river today. Artistic expression brings joy and fulfillment.",  # noqa: E501
            "Dreams and imagination offer insights into reality. Pay attention to symbolic messages.",
            "Your spiritual nature seeks connection with something greater. Meditation and reflection bring peace.",  # noqa: E501
            "Emotional depth allows you to understand others' pain. Your healing presence comforts those in need.",  # noqa: E501
            "Sacrifice for others brings unexpected rewards. Your selfless nature creates positive karma.",  # noqa: E501
        ),
    }
)
