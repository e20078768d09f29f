
"""Idle-screen calibration panel: pick a field and step it within its limits"""
import pygame

from stacker_config import LIMITS


class Overlay:
    def __init__(self):
        self.items=[
            ("width","Grid width",""),
            ("height","Grid height",""),
            ("base_speed","Gravity lag","ms"),
        ]
        self.index=0

    def selected(self): return self.items[self.index][0]

    def handle(self, e, game) -> bool:
        """Consume a KEYDOWN if it is a panel key; True when it was used."""
        if e.key==pygame.K_UP: self.index=(self.index-1)%len(self.items); return True
        if e.key==pygame.K_DOWN: self.index=(self.index+1)%len(self.items); return True
        if e.key not in (pygame.K_LEFT,pygame.K_RIGHT): return False
        key=self.selected()
        _,_,step=LIMITS[key]
        val=getattr(game.state.config,key)
        val+=step if e.key==pygame.K_RIGHT else -step
        game.reconfigure(**{key:val})
        return True

    def draw(self, screen, font, config, x, y):
        for i,(key,label,unit) in enumerate(self.items):
            lo,hi,_=LIMITS[key]
            col=(34,211,238) if i==self.index else (148,163,184)
            v=getattr(config,key)
            screen.blit(font.render(f"{label}: {v}{unit}",True,col),(x,y))
            frac=(v-lo)/(hi-lo)
            pygame.draw.rect(screen,(30,41,59),(x,y+22,160,4))
            pygame.draw.rect(screen,col,(x,y+22,int(160*frac),4))
            y+=44
